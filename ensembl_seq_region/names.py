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

"""Turn FASTA ids and AGP object names into seq_region names.

A name is taken from the accession map if one is given and knows the id,
otherwise from the first group of a user supplied regular expression,
otherwise the id is used as it is.
"""

from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import Dict, Optional, Pattern, Union

from ensembl_seq_region.exceptions import NameResolutionError

logger = logging.getLogger(__name__)

CHR_PREFIX = re.compile(r"^chr(\S+)")


def strip_chr_prefix(raw_id: str) -> str:
    """Remove a leading 'chr' so chr5 becomes 5. A bare 'chr' is left alone."""
    match = CHR_PREFIX.match(raw_id)
    if match:
        return match.group(1)
    return raw_id


def resolve_name(
    raw_id: str,
    regex: Optional[Union[str, Pattern[str]]] = None,
    accession_map: Optional[Dict[str, str]] = None,
) -> str:
    """Return the seq_region name to use for raw_id.

    Args:
        raw_id: Identifier as read from the FASTA header or the AGP object column.
        regex: Pattern whose first group is the name. A pattern that does not
            match, or that has no group, raises NameResolutionError.
        accession_map: Accession to name lookup, checked before the regex.

    Returns:
        The seq_region name.
    """
    if not raw_id:
        raise NameResolutionError("Cannot name a sequence with an empty id")
    if accession_map and raw_id in accession_map:
        return accession_map[raw_id]

    if not regex:
        return raw_id

    match = re.search(regex, raw_id)
    if match is None:
        raise NameResolutionError(f"Regex {_pattern(regex)} does not match id {raw_id}")
    if match.re.groups < 1 or not match.group(1):
        raise NameResolutionError(
            f"Regex {_pattern(regex)} did not capture a name from id {raw_id}"
        )
    name = match.group(1)
    logger.debug("Name %s extracted from %s", name, raw_id)
    return name


def _pattern(regex: Union[str, Pattern[str]]) -> str:
    return regex if isinstance(regex, str) else regex.pattern


def load_name_file(name_file: Union[str, Path]) -> Dict[str, str]:
    """Read an accession to name map.

    Each line holds at least two whitespace separated columns. The second
    column is the accession and the first column is the name to use for it.
    """
    acc_to_name: Dict[str, str] = {}
    with open(name_file, encoding="utf-8") as name_fh:
        for line in name_fh:
            name_values = line.split()
            if len(name_values) < 2:
                continue
            acc_to_name[name_values[1]] = name_values[0]
    logger.info("Read %d names from %s", len(acc_to_name), name_file)
    return acc_to_name
