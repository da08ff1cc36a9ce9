# See the NOTICE file distributed with this work for additional information
# regarding copyright ownership.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Load one seq_region per FASTA entry, with or without its dna."""

from __future__ import annotations
import gzip
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Pattern, TextIO, Union, TYPE_CHECKING

from ensembl_seq_region.coord_system import CoordSystem
from ensembl_seq_region.names import resolve_name
from ensembl_seq_region.seq_region import whole_sequence_slice

if TYPE_CHECKING:
    from ensembl_seq_region.adaptors import SliceAdaptor

logger = logging.getLogger(__name__)

# Only ATGCN may go into the dna table
AMBIGUOUS_BASE = re.compile(r"[^ACGTN]", re.IGNORECASE)


@dataclass
class FastaRecord:
    id: str  # pylint: disable=invalid-name
    description: str
    sequence: str


def open_text(path: Union[str, Path]) -> TextIO:
    """Open a plain or gzipped text file for reading."""
    path = Path(path)
    if path.suffix == ".gz":
        return gzip.open(path, "rt")
    return path.open()


def read_fasta(path: Union[str, Path]) -> Iterator[FastaRecord]:
    """Yield the records of a FASTA file one at a time.

    The id is the first word of the header line and the description the rest
    of it. Lines before the first header and blank lines are ignored.
    """
    header: Optional[str] = None
    buf: List[str] = []
    with open_text(path) as fh:
        for ln in fh:
            ln = ln.strip()
            if not ln:
                continue
            if ln.startswith(">"):
                if header is not None:
                    yield _record(header, buf)
                header = ln[1:]
                buf = []
            elif header is not None:
                buf.append("".join(ln.split()))
        if header is not None:
            yield _record(header, buf)


def _record(header: str, buf: List[str]) -> FastaRecord:
    parts = header.split(None, 1)
    seq_id = parts[0] if parts else ""
    description = parts[1] if len(parts) > 1 else ""
    return FastaRecord(seq_id, description, "".join(buf))


def has_ambiguous_bases(sequence: str) -> bool:
    return AMBIGUOUS_BASE.search(sequence) is not None


def parse_fasta(  # pylint: disable=too-many-arguments
    records: Iterable[FastaRecord],
    coord_system: CoordSystem,
    slice_adaptor: "SliceAdaptor",
    store_sequence: bool,
    regex: Optional[Union[str, Pattern[str]]] = None,
    accession_map: Optional[Dict[str, str]] = None,
    verbose: bool = False,
) -> int:
    """Store a full length slice for every record.

    When store_sequence is set the record's sequence is stored as well.
    Sequences with bases other than ATGCN are reported and stored anyway.

    Args:
        records: FASTA records, usually from read_fasta.
        coord_system: Coordinate system the slices belong to.
        slice_adaptor: Where the slices go.
        store_sequence: Store the dna along with each slice.
        regex: Optional pattern extracting the name from the record id.
        accession_map: Optional record id to name map.
        verbose: Warn about every name used so it can be checked.

    Returns:
        The number of records with at least one ambiguous base.
    """
    have_ambiguous_bases = 0
    stored = 0
    for record in records:
        name = resolve_name(record.id, regex, accession_map)
        if verbose:
            logger.warning(
                "You are going to store with name %s, is this what you wanted?", name
            )
        length = len(record.sequence)
        if length == 0:
            logger.warning("Skipping %s, it has no sequence", name)
            continue

        slice_ = whole_sequence_slice(name, length, coord_system)
        if store_sequence:
            if has_ambiguous_bases(record.sequence):
                have_ambiguous_bases += 1
                logger.warning(
                    "Slice %s has at least one non-ATGCN (RYKMSWBDHV) base. Please change to N.",
                    name,
                )
            slice_adaptor.store(slice_, record.sequence)
        else:
            slice_adaptor.store(slice_)
        stored += 1

    logger.info("Stored %d slices in coord system %s", stored, coord_system.name)
    return have_ambiguous_bases
