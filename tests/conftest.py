"""
Shared fixtures: a small two-character catalog held in memory.
"""
import copy

import pytest

from frame_data.catalog import CatalogStore
from frame_data.config import FrameDataConfig
from frame_data.importing import DataImporter, InMemoryRowsProvider
from frame_data.resolution import create_index_cache, create_move_resolver

BASE_SHEETS = {
    "Characters": [
        {"Name": "FILIA", "Pretty Name": "Filia", "Colour": "#F2C94C"},
        {"Name": "Big Band", "Pretty Name": "Big Band", "Colour": "#8B6F47"},
    ],
    "Macros": [
        {"Key": "MACRO_5LP", "Value": "5LP\nS.LP"},
    ],
    "FILIA": [
        {"Move Name": "STAND LP", "Aliases": "MACRO_5LP\nJAB\nQWERTY", "Guard": "Mid", "Startup": "5"},
        {"Move Name": "H HAIRBALL", "Aliases": "HAIRBALL\n/H\\s*HAIR/", "Damage": "1500"},
        {"Move Name": "L HAIRBALL", "Aliases": "/HAIR/"},
    ],
    "BIG BAND": [
        {"Move Name": "BEAT EXTEND", "Aliases": "BEAT EXT"},
        {"Move Name": "A TRAIN", "Aliases": "TRAIN\n/TRAIN$/"},
    ],
}


def make_sheets():
    """Fresh, mutable copy of the base sheets."""
    return copy.deepcopy(BASE_SHEETS)


@pytest.fixture
def sheets():
    return make_sheets()


@pytest.fixture
def provider(sheets):
    return InMemoryRowsProvider(sheets)


@pytest.fixture
def store():
    return CatalogStore()


@pytest.fixture
def config():
    return FrameDataConfig(load_on_start=False)


@pytest.fixture
def index_cache(store, config):
    return create_index_cache(store, config)


@pytest.fixture
def importer(store):
    return DataImporter(store)


@pytest.fixture
def resolver(store, config, index_cache):
    return create_move_resolver(store, config, index_cache)


@pytest.fixture
def loaded_store(store, importer, provider, index_cache):
    """Store with the base sheets imported (index cache already registered)."""
    importer.import_catalog(provider)
    return store
