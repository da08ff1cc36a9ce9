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

"""Load one seq_region per assembled object of an AGP file.

Only the object name and object end columns are used, e.g.

    GL000001.1  1       615     1  F  AP006221.1   36117   36731   -
    GL000001.1  616     167417  2  F  AL627309.15  103     166904  +
    GL000001.1  167418  217417  3  N  50000        clone   yes

gives a single seq_region GL000001.1 of length 217417.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional, Union, TYPE_CHECKING

from ensembl_seq_region.coord_system import CoordSystem
from ensembl_seq_region.fasta_loader import open_text
from ensembl_seq_region.names import resolve_name, strip_chr_prefix
from ensembl_seq_region.seq_region import whole_sequence_slice

if TYPE_CHECKING:
    from ensembl_seq_region.adaptors import SliceAdaptor

logger = logging.getLogger(__name__)

# object, object_beg, object_end, part_number, component_type and at least
# three type specific columns
AGP_MIN_COLUMNS = 8


def read_agp(path: Union[str, Path]) -> Iterator[str]:
    with open_text(path) as fh:
        for line in fh:
            yield line.rstrip("\n")


def collect_end_values(
    rows: Iterable[str], accession_map: Optional[Dict[str, str]] = None
) -> Dict[str, int]:
    """Return the largest object end seen for every object name.

    Rows that are too short or have a non numeric end are skipped with a
    warning.
    """
    end_value: Dict[str, int] = {}
    skipped = 0
    for line_number, row in enumerate(rows, 1):
        if not row.strip() or row.startswith("#"):
            continue
        values = row.split()
        if len(values) < AGP_MIN_COLUMNS:
            logger.warning(
                "Skipping AGP line %d, expected at least %d columns but found %d",
                line_number,
                AGP_MIN_COLUMNS,
                len(values),
            )
            skipped += 1
            continue
        try:
            end = int(values[2])
            if end < 1:
                raise ValueError(end)
        except ValueError:
            logger.warning(
                "Skipping AGP line %d, object end '%s' is not a positive integer",
                line_number,
                values[2],
            )
            skipped += 1
            continue

        name = resolve_name(strip_chr_prefix(values[0]), accession_map=accession_map)
        logger.debug("Name: %s", name)
        end_value[name] = max(end_value.get(name, 0), end)

    if skipped:
        logger.warning("Skipped %d malformed AGP lines", skipped)
    return end_value


def parse_agp(
    rows: Iterable[str],
    coord_system: CoordSystem,
    slice_adaptor: "SliceAdaptor",
    accession_map: Optional[Dict[str, str]] = None,
) -> Dict[str, int]:
    """Store a slice per AGP object, spanning 1 to its largest end.

    No dna is stored, AGP objects are assembled from other seq_regions.

    Returns:
        The seq_region names and the lengths they were stored with.
    """
    end_value = collect_end_values(rows, accession_map)
    for name, end in end_value.items():
        slice_adaptor.store(whole_sequence_slice(name, end, coord_system))
    logger.info("Stored %d slices in coord system %s", len(end_value), coord_system.name)
    return end_value
