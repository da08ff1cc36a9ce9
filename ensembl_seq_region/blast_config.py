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

"""Per database BLAST search parameters.

The configuration is a JSON list with one object per searchable database:

    [
        {"name": "embl_vertrna", "ungapped": false, "min_unmasked": 10},
        {"name": "uniprot", "ungapped": true}
    ]
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlastDatabaseConfig:
    name: str
    ungapped: bool = False
    min_unmasked: Optional[int] = None


class BlastConfig:
    """Read only lookup of the search parameters of each database."""

    def __init__(self, databases: Iterable[BlastDatabaseConfig] = ()) -> None:
        self._databases: Dict[str, BlastDatabaseConfig] = {
            database.name: database for database in databases
        }

    @classmethod
    def from_entries(cls, entries: List[Dict[str, Any]]) -> "BlastConfig":
        """Build the configuration, skipping entries without a name."""
        databases = []
        for entry in entries:
            name = entry.get("name") if entry else None
            if not name:
                logger.warning("Either the database entry %s or its name isn't defined, skipping it", entry)
                continue
            min_unmasked = entry.get("min_unmasked")
            databases.append(
                BlastDatabaseConfig(
                    name=name,
                    ungapped=bool(entry.get("ungapped")),
                    min_unmasked=int(min_unmasked) if min_unmasked is not None else None,
                )
            )
        return cls(databases)

    def __contains__(self, name: object) -> bool:
        return name in self._databases

    def __len__(self) -> int:
        return len(self._databases)

    def is_ungapped(self, name: str) -> bool:
        database = self._databases.get(name)
        return database.ungapped if database else False

    def min_unmasked(self, name: str) -> Optional[int]:
        database = self._databases.get(name)
        return database.min_unmasked if database else None


def load_blast_config(path: Union[str, Path]) -> BlastConfig:
    with open(path, encoding="utf-8") as config_f:
        entries = json.load(config_f)
    if not isinstance(entries, list):
        raise ValueError(f"{path} must contain a list of database entries")
    config = BlastConfig.from_entries(entries)
    logger.info("Read search parameters for %d databases from %s", len(config), path)
    return config
