import json
import logging

import pytest

from ensembl_seq_region.blast_config import BlastConfig, load_blast_config


def test_load_blast_config(tmp_path):
    config_file = tmp_path / "blast_databases.json"
    config_file.write_text(
        json.dumps(
            [
                {"name": "embl_vertrna", "ungapped": False, "min_unmasked": 10},
                {"name": "uniprot", "ungapped": True},
            ]
        )
    )

    config = load_blast_config(config_file)

    assert len(config) == 2
    assert "uniprot" in config
    assert config.is_ungapped("uniprot")
    assert not config.is_ungapped("embl_vertrna")
    assert config.min_unmasked("embl_vertrna") == 10
    assert config.min_unmasked("uniprot") is None


def test_unknown_database_uses_defaults():
    config = BlastConfig()

    assert not config.is_ungapped("refseq")
    assert config.min_unmasked("refseq") is None


def test_entries_without_name_are_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        config = BlastConfig.from_entries([{"ungapped": True}, {"name": "uniprot"}])

    assert len(config) == 1
    assert "isn't defined" in caplog.text


def test_config_must_be_a_list(tmp_path):
    config_file = tmp_path / "blast_databases.json"
    config_file.write_text(json.dumps({"name": "uniprot"}))

    with pytest.raises(ValueError):
        load_blast_config(config_file)
