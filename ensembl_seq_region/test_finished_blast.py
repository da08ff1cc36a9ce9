from dataclasses import dataclass

import pytest

from ensembl_seq_region.blast_config import BlastConfig, BlastDatabaseConfig
from ensembl_seq_region.exceptions import JobError
from ensembl_seq_region.finished_blast import Analysis, FinishedBlast


@dataclass
class Hit:
    hseqname: str


class FakeRunner:
    def __init__(self, hits=(), error=None, **kwargs):
        self.hits = list(hits)
        self.error = error
        self.kwargs = kwargs
        self.ran = False
        self.db_version_searched = "uniprot_2026_04"

    def run(self):
        self.ran = True
        if self.error:
            raise self.error

    def output(self):
        return self.hits


class FakeContigFetcher:
    def __init__(self, sequences):
        self.sequences = sequences

    def fetch_repeatmasked_seq(self, name, repeat_masking, soft_masking):
        return self.sequences.get(name)


class FakeDescriptionWriter:
    def __init__(self):
        self.calls = []

    def write_descriptions(self, hit_names):
        self.calls.append(list(hit_names))


def make_job(sequence="NNNNACGTACGTNNNN", hits=(), error=None, config=None, input_id="contig_1"):
    runners = []

    def runner_factory(**kwargs):
        runner = FakeRunner(hits, error, **kwargs)
        runners.append(runner)
        return runner

    writer = FakeDescriptionWriter()
    job = FinishedBlast(
        input_id,
        Analysis(db_file="uniprot", program="blastx", parameters="-cpus 1"),
        FakeContigFetcher({"contig_1": sequence}),
        runner_factory,
        writer,
        config if config is not None else BlastConfig([BlastDatabaseConfig("uniprot", ungapped=True)]),
    )
    return job, runners, writer


def test_fetch_input_builds_the_runner():
    job, runners, _ = make_job()

    job.fetch_input()

    assert not job.input_is_void
    assert runners[0].kwargs == {
        "query": "NNNNACGTACGTNNNN",
        "database": "uniprot",
        "program": "blastx",
        "options": "-cpus 1",
        "threshold_type": "PVALUE",
        "threshold": 1,
        "ungapped": True,
    }


def test_no_input_id():
    job, _, _ = make_job(input_id=None)

    with pytest.raises(JobError, match="No input id"):
        job.fetch_input()


def test_contig_not_found():
    job, _, _ = make_job(input_id="contig_2")

    with pytest.raises(JobError, match="Unable to fetch contig"):
        job.fetch_input()


@pytest.mark.parametrize("sequence", ["NNNNNNNN", "ACNNGTNNAC", "acgtacgtacgt"])
def test_masked_input_is_void(sequence):
    job, runners, writer = make_job(sequence=sequence, hits=[Hit("P12345")])

    job.fetch_input()
    job.run()

    assert job.input_is_void
    assert not runners[0].ran
    assert job.output() == []
    assert writer.calls == []


def test_too_few_unmasked_bases_for_the_database():
    config = BlastConfig([BlastDatabaseConfig("uniprot", min_unmasked=20)])
    job, _, _ = make_job(sequence="NNACGTACGTNN", config=config)

    job.fetch_input()

    assert job.input_is_void


def test_run_writes_descriptions_once_per_hit_sequence():
    hits = [Hit("P12345"), Hit("Q67890"), Hit("P12345")]
    job, _, writer = make_job(hits=hits)

    job.fetch_input()
    job.run()

    assert writer.calls == [["P12345", "Q67890"]]
    assert job.output() == hits
    assert job.db_version_searched == "uniprot_2026_04"


def test_run_without_hits_writes_nothing():
    job, _, writer = make_job()

    job.fetch_input()
    job.run()

    assert writer.calls == []


def test_run_before_fetch_input():
    job, _, _ = make_job()

    with pytest.raises(JobError, match="Runnable module not set"):
        job.run()


def test_quoted_runner_error_sets_the_job_status():
    job, _, _ = make_job(error=RuntimeError('"BLAST_DB_MISSING"'))
    job.fetch_input()

    with pytest.raises(JobError):
        job.run()

    assert job.failing_job_status == "BLAST_DB_MISSING"


def test_other_runner_error_keeps_the_job_status():
    job, _, _ = make_job(error=RuntimeError("BLAST exited with status 1"))
    job.fetch_input()

    with pytest.raises(JobError, match="BLAST exited"):
        job.run()

    assert job.failing_job_status is None


def test_output_is_empty_until_run():
    hits = [Hit("P12345")]
    job, _, _ = make_job(hits=hits)

    job.fetch_input()
    assert job.output() == []

    job.run()
    assert job.output() == hits
