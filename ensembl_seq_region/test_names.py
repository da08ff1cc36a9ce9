import re

import pytest

from ensembl_seq_region.exceptions import NameResolutionError
from ensembl_seq_region.names import load_name_file, resolve_name, strip_chr_prefix


def test_raw_id_is_used_without_regex_or_map():
    assert resolve_name("contig_1") == "contig_1"


def test_accession_map_wins_over_regex():
    name = resolve_name("AL627309.15", r"^(\w+)\.", {"AL627309.15": "clone7"})
    assert name == "clone7"


def test_accession_map_without_the_id_falls_back_to_raw_id():
    assert resolve_name("AP006221.1", accession_map={"AL627309.15": "clone7"}) == "AP006221.1"


def test_regex_first_group_is_the_name():
    assert resolve_name("gi|12345|emb|AL627309.15|", r"emb\|([^|]+)\|") == "AL627309.15"


def test_compiled_regex():
    assert resolve_name("scaffold_12 extra", re.compile(r"^scaffold_(\d+)")) == "12"


def test_regex_not_matching_is_fatal():
    with pytest.raises(NameResolutionError):
        resolve_name("contig_1", r"^chromosome_(\d+)")


def test_regex_without_group_is_fatal():
    with pytest.raises(NameResolutionError):
        resolve_name("contig_1", r"contig")


@pytest.mark.parametrize(
    "raw_id, expected",
    [("chr5", "5"), ("chrX", "X"), ("5", "5"), ("chr", "chr"), ("scaffold_chr1", "scaffold_chr1")],
)
def test_strip_chr_prefix(raw_id, expected):
    assert strip_chr_prefix(raw_id) == expected


def test_name_file_columns_are_name_then_accession(tmp_path):
    name_file = tmp_path / "names.txt"
    name_file.write_text("clone7 AL627309.15\nclone8\tAP006221.1 extra\n\nlonely\n")

    assert load_name_file(name_file) == {"AL627309.15": "clone7", "AP006221.1": "clone8"}


def test_missing_name_file(tmp_path):
    with pytest.raises(OSError):
        load_name_file(tmp_path / "missing.txt")


def test_empty_id_is_fatal():
    with pytest.raises(NameResolutionError):
        resolve_name("")
