from dataclasses import replace
from typing import Dict, List, Optional, Tuple

import pytest
import sqlalchemy as db

from ensembl_seq_region.adaptors import create_schema
from ensembl_seq_region.coord_system import CoordSystem
from ensembl_seq_region.seq_region import Slice


class FakeCoordSystemAdaptor:
    def __init__(self):
        self.coord_systems: Dict[Tuple[str, Optional[str]], CoordSystem] = {}
        self.store_calls = 0
        self.fetch_calls = 0

    def fetch_by_name(self, name, version=None):
        self.fetch_calls += 1
        return self.coord_systems.get((name, version))

    def store(self, coord_system):
        self.store_calls += 1
        stored = replace(coord_system, dbID=len(self.coord_systems) + 1)
        self.coord_systems[(stored.name, stored.version)] = stored
        return stored


class FakeSliceAdaptor:
    def __init__(self):
        self.stored: List[Tuple[Slice, Optional[str]]] = []

    def store(self, slice_, sequence=None):
        self.stored.append((slice_, sequence))
        return slice_

    def by_name(self):
        return {slice_.seq_region_name: (slice_, sequence) for slice_, sequence in self.stored}


@pytest.fixture
def cs_adaptor():
    return FakeCoordSystemAdaptor()


@pytest.fixture
def slice_adaptor():
    return FakeSliceAdaptor()


@pytest.fixture
def contig_cs():
    return CoordSystem("contig", None, 4, is_default=True, is_sequence_level=True, dbID=1)


@pytest.fixture
def chromosome_cs():
    return CoordSystem("chromosome", "GRCh38", 1, is_default=True, dbID=2)


@pytest.fixture
def engine():
    sqlite_engine = db.create_engine("sqlite://")
    create_schema(sqlite_engine)
    yield sqlite_engine
    sqlite_engine.dispose()
