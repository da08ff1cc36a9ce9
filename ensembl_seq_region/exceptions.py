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

"""Exceptions raised while loading seq_regions or running search jobs."""


class SeqRegionLoaderError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(SeqRegionLoaderError):
    """Missing or incompatible options, detected before touching the database."""


class NameResolutionError(SeqRegionLoaderError):
    """A sequence id could not be turned into a seq_region name."""


class AmbiguousBasesError(SeqRegionLoaderError):
    """Raised once, after a FASTA load, when some sequences had non-ACGTN bases."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(
            f"All sequences have loaded, but {count} slices have ambiguous bases"
            " - see warnings. Please change all ambiguous bases (RYKMSWBDHV) to N."
        )


class StoreError(SeqRegionLoaderError):
    """The database refused to store a coordinate system, seq_region or dna."""


class JobError(SeqRegionLoaderError):
    """A search job could not fetch its input or run."""
