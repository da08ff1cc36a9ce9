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

"""Slices: 1-based, inclusive regions of seq_regions."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ensembl_seq_region.coord_system import CoordSystem


@dataclass
class Slice:
    """A 1-based, inclusive region of a seq_region."""

    seq_region_name: str
    start: int
    end: int
    seq_region_length: int
    strand: int
    coord_system: CoordSystem
    dbID: Optional[int] = None  # pylint: disable=invalid-name

    def __post_init__(self) -> None:
        if not self.seq_region_name:
            raise ValueError("A slice needs a seq_region name")
        if not 1 <= self.start <= self.end:
            raise ValueError(
                f"Invalid slice {self.seq_region_name}:{self.start}-{self.end}"
            )
        if self.strand not in (1, -1):
            raise ValueError(f"Strand must be 1 or -1, got {self.strand}")


def make_slice(  # pylint: disable=too-many-arguments
    name: str,
    start: int,
    end: int,
    length: int,
    strand: int,
    coord_system: CoordSystem,
) -> Slice:
    """Build a slice from its name, start, end, seq_region length and strand."""
    return Slice(
        seq_region_name=name,
        start=start,
        end=end,
        seq_region_length=length,
        strand=strand,
        coord_system=coord_system,
    )


def whole_sequence_slice(name: str, length: int, coord_system: CoordSystem) -> Slice:
    """Slice spanning a full seq_region of the given length on the forward strand."""
    return make_slice(name, 1, length, length, 1, coord_system)
