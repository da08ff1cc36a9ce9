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

"""BLAST search job for the finished (clone by clone) analysis pipeline.

The job fetches the repeat masked sequence of a contig, runs BLAST on it
against the database of its analysis and has the descriptions of the hit
sequences written. BLAST itself, the contig fetcher and the description
writer are supplied by the caller, e.g.

    job = FinishedBlast(
        "AL627309.15.1.166904",
        Analysis(db_file="uniprot", program="blastx"),
        contig_fetcher,
        runner_factory,
        description_writer,
        load_blast_config("blast_databases.json"),
    )
    job.fetch_input()
    job.run()
    hits = job.output()
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Protocol

from ensembl_seq_region.blast_config import BlastConfig
from ensembl_seq_region.exceptions import JobError

logger = logging.getLogger(__name__)

SEARCHABLE = re.compile(r"[CATG]{3}")
JOB_STATUS = re.compile(r'^"([A-Z_]{1,40})"$', re.IGNORECASE)
UNMASKED_BASE = re.compile(r"[ACGT]")


class Runnable(Protocol):
    def run(self) -> None:
        ...

    def output(self) -> List[Any]:
        ...


class ContigFetcher(Protocol):
    def fetch_repeatmasked_seq(
        self, name: str, repeat_masking: List[str], soft_masking: bool
    ) -> Optional[str]:
        ...


class DescriptionWriter(Protocol):
    def write_descriptions(self, hit_names: Iterable[str]) -> None:
        ...


RunnerFactory = Callable[..., Runnable]


@dataclass
class Analysis:
    db_file: str
    program: str
    parameters: str = ""


class FinishedBlast:  # pylint: disable=too-many-instance-attributes
    """Fetch the input of a BLAST search, run it and collect its output."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        input_id: Optional[str],
        analysis: Analysis,
        contig_fetcher: ContigFetcher,
        runner_factory: RunnerFactory,
        description_writer: DescriptionWriter,
        blast_config: BlastConfig,
        repeat_masking: Optional[List[str]] = None,
        soft_masking: bool = False,
    ) -> None:
        self.input_id = input_id
        self.analysis = analysis
        self.contig_fetcher = contig_fetcher
        self.runner_factory = runner_factory
        self.description_writer = description_writer
        self.blast_config = blast_config
        self.repeat_masking = repeat_masking if repeat_masking is not None else ["RepeatMask"]
        self.soft_masking = soft_masking

        self.query: Optional[str] = None
        self.runnable: Optional[Runnable] = None
        self.input_is_void = False
        self.failing_job_status: Optional[str] = None
        self.db_version_searched: Optional[str] = None
        self.has_run = False

    def fetch_input(self) -> None:
        """Fetch the masked contig and prepare the BLAST runnable.

        The input is void when the masked sequence has no stretch of three
        unmasked bases, or fewer unmasked bases than the database asks for.
        """
        if not self.input_id:
            raise JobError("No input id")
        logger.info("INPUT ID: %s", self.input_id)

        query = self.contig_fetcher.fetch_repeatmasked_seq(
            self.input_id, self.repeat_masking, self.soft_masking
        )
        if not query:
            raise JobError(f"Unable to fetch contig {self.input_id}")
        self.query = query

        database = self.analysis.db_file
        min_unmasked = self.blast_config.min_unmasked(database)
        unmasked = len(UNMASKED_BASE.findall(query))
        if not SEARCHABLE.search(query):
            self.input_is_void = True
            logger.warning("Need at least 3 nucleotides in %s", self.input_id)
        elif min_unmasked is not None and unmasked < min_unmasked:
            self.input_is_void = True
            logger.warning(
                "%s has %d unmasked bases, %s needs at least %d",
                self.input_id,
                unmasked,
                database,
                min_unmasked,
            )
        else:
            self.input_is_void = False

        self.runnable = self.runner_factory(
            query=query,
            database=database,
            program=self.analysis.program,
            options=self.analysis.parameters,
            threshold_type="PVALUE",
            threshold=1,
            ungapped=self.blast_config.is_ungapped(database),
        )

    def run(self) -> None:
        """Run BLAST and write the descriptions of the sequences hit.

        A runner error whose message is a quoted status such as "VOID_INPUT"
        is kept in failing_job_status before the JobError is raised.
        """
        if self.runnable is None:
            raise JobError("Runnable module not set")
        if self.query is None:
            raise JobError("Input not fetched")
        if self.input_is_void:
            logger.info("Not running BLAST on void input %s", self.input_id)
            return

        try:
            self.runnable.run()
        except Exception as err:  # pylint: disable=broad-except
            message = str(err).strip()
            status = JOB_STATUS.match(message)
            if status:
                self.failing_job_status = status.group(1)
            raise JobError(message) from err

        self.db_version_searched = getattr(self.runnable, "db_version_searched", None)
        self.has_run = True
        output = self.runnable.output()
        if output:
            hit_names = list(dict.fromkeys(hit.hseqname for hit in output))
            logger.info("Writing descriptions for %d hit sequences", len(hit_names))
            self.description_writer.write_descriptions(hit_names)

    def output(self) -> List[Any]:
        if self.runnable is None or not self.has_run:
            return []
        return list(self.runnable.output())
