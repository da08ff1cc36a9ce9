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

"""Coordinate systems and the find-or-create logic used by the loaders."""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ensembl_seq_region.adaptors import CoordSystemAdaptor

logger = logging.getLogger(__name__)


@dataclass
class CoordSystem:
    """A named, versioned level of the assembly hierarchy.

    Rank 1 is the top level (usually chromosome); only one coordinate system
    can hold a given rank. Only sequence level systems carry dna.
    """

    name: str
    version: Optional[str]
    rank: int
    is_default: bool = False
    is_sequence_level: bool = False
    dbID: Optional[int] = None  # pylint: disable=invalid-name

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("A coordinate system needs a name")
        if self.rank < 1:
            raise ValueError(f"Rank must be a positive integer, got {self.rank}")

    @property
    def attrib(self) -> str:
        """Comma separated attrib value as found in the coord_system table."""
        values: List[str] = []
        if self.is_default:
            values.append("default_version")
        if self.is_sequence_level:
            values.append("sequence_level")
        return ",".join(values)


def fetch_or_store_coord_system(  # pylint: disable=too-many-arguments
    adaptor: "CoordSystemAdaptor",
    name: str,
    version: Optional[str],
    rank: int,
    default: bool = False,
    sequence_level: bool = False,
) -> CoordSystem:
    """Return the coordinate system called name/version, storing it if needed.

    An existing coordinate system is reused as it is, even if its rank or
    flags differ from the ones requested.
    """
    coord_system = adaptor.fetch_by_name(name, version)
    if coord_system is not None:
        logger.info(
            "Using existing coord system %s %s (rank %d)",
            coord_system.name,
            coord_system.version or "",
            coord_system.rank,
        )
        return coord_system

    coord_system = CoordSystem(
        name=name,
        version=version,
        rank=rank,
        is_default=default,
        is_sequence_level=sequence_level,
    )
    coord_system = adaptor.store(coord_system)
    logger.info("Stored coord system %s %s (rank %d)", name, version or "", rank)
    return coord_system
