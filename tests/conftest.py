"""Shared fixtures for sectionkit tests.

Sections are built from short identity strings so assertions can compare
plain lists of identities.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sectionkit.config import ConfigManager
from sectionkit.core.models import EngineConfig, Item, Section
from sectionkit.core.services import CollectionEngine

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture
def make_section():
    def factory(identity, item_ids, total_count=None, can_load_more=False, selected=()):
        items = tuple(Item(iid, selected=iid in selected) for iid in item_ids)
        if total_count is None:
            total_count = len(items)
        return Section(identity, total_count=total_count, can_load_more=can_load_more, items=items)
    return factory


@pytest.fixture
def ids_of():
    def view(section):
        return [item.identity for item in section.items]
    return view


@pytest.fixture
def selected_ids():
    def view(sections):
        return [item.identity for section in sections for item in section.items if item.selected]
    return view


@pytest.fixture
def sections(make_section):
    """Two sections: s0 = [a, b, c], s1 = [d, e]."""
    return [
        make_section("s0", ["a", "b", "c"]),
        make_section("s1", ["d", "e"]),
    ]


@pytest.fixture
def engine():
    return CollectionEngine(EngineConfig())


@pytest.fixture
def caching_engine():
    return CollectionEngine(EngineConfig(retain_deleted_items=True))


@pytest.fixture
def fresh_config_manager(tmp_path, monkeypatch):
    """ConfigManager reading overrides from an empty temporary directory."""
    monkeypatch.setenv("SECTIONKIT_CONFIG_DIR", str(tmp_path))
    ConfigManager.reset()
    yield tmp_path
    ConfigManager.reset()
