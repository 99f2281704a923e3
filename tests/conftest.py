"""
Shared fixtures for the PropGraph test suite.
"""

import sys
from pathlib import Path

import pytest

# Ensure the backend/ directory is on the import path so that
# propgraph.config / propgraph.services / etc. can be imported.
BACKEND_ROOT = Path(__file__).resolve().parent.parent / "backend"
sys.path.insert(0, str(BACKEND_ROOT))

from propgraph.config import SearchConfig  # noqa: E402
from propgraph.models.graph import Record  # noqa: E402
from propgraph.services.snapshot import SnapshotStore  # noqa: E402


SAMPLE_RECORDS = [
    {"labels": ["Author"], "properties": {"nodeId": "author_homer", "name": "Homer"}},
    {"labels": ["Author"], "properties": {"nodeId": "author_hymns", "name": "Homeric Hymns"}},
    {"labels": ["Source"], "properties": {"nodeId": "source_iliad", "title": "Iliad", "author": "Homer"}},
    {"labels": ["Source"], "properties": {"nodeId": "source_misc", "tags": ["ancient", "greek", "homeric"]}},
    {"labels": ["User"], "properties": {"nodeId": "user_homer99", "username": "homer99", "password": "homer"}},
    {"labels": ["Place", "Entity"], "properties": {"nodeId": "place_troy", "name": "Troy"}},
]


# =============================================================================
# Fixtures - policy and records
# =============================================================================

@pytest.fixture
def config() -> SearchConfig:
    """Default search policy."""
    return SearchConfig()


@pytest.fixture
def records() -> list[Record]:
    """Sample records in store order."""
    return [Record.model_validate(item) for item in SAMPLE_RECORDS]


@pytest.fixture
def snapshot_store(records) -> SnapshotStore:
    """In-memory store over the sample records."""
    return SnapshotStore(records=records)


@pytest.fixture
def make_record():
    """Factory building a record from keyword properties."""
    def _make(labels=None, **properties) -> Record:
        return Record(labels=labels or [], properties=properties)
    return _make
