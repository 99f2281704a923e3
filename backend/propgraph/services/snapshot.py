"""
Snapshot Store - Local JSON Records

This module provides a record store backed by a JSON file. It serves
search when Neo4j cannot be reached at startup, feeds the seed script,
and backs the test suite.

The snapshot file is a list of records:
[
    {"labels": ["Author"], "properties": {"nodeId": "author_homer", "name": "Homer"}},
    {"labels": ["Source"], "properties": {"title": "Iliad", "tags": ["epic"]}}
]

A {"records": [...]} wrapper object is accepted as well.

Filter semantics are those of SearchFilters.matches(), identical to the
Cypher the Neo4j store runs. Records keep file order.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from propgraph.config import get_snapshot_path
from propgraph.exceptions import StoreError
from propgraph.models.graph import Record
from propgraph.models.search import SearchFilters

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    In-memory record store loaded from a JSON snapshot.

    Example:
        >>> store = SnapshotStore("data/records.json")
        >>> store.find_records(SearchFilters(include_labels=("Author",)))
        [Record(labels=['Author'], ...)]
    """

    def __init__(
        self,
        snapshot_path: Optional[Union[str, Path]] = None,
        records: Optional[list[Record]] = None
    ):
        """
        Initialize the snapshot store.

        Args:
            snapshot_path: Path to the snapshot file (default: from settings)
            records: Records to serve directly instead of reading a file
        """
        self.snapshot_path = Path(snapshot_path) if snapshot_path else get_snapshot_path()
        self._records: Optional[list[Record]] = list(records) if records is not None else None
        # Injected records have no file to reload from
        self._from_file = records is None

        logger.info(f"SnapshotStore initialized with path: {self.snapshot_path}")

    @classmethod
    def from_dicts(cls, items: list[dict[str, Any]]) -> "SnapshotStore":
        """Create a store over already-parsed record dictionaries."""
        return cls(records=parse_records(items))

    def load(self) -> list[Record]:
        """
        Load records from the snapshot file.

        Caches the result for subsequent calls.

        Returns:
            Records in file order

        Raises:
            StoreError: If the file is missing or malformed
        """
        if self._records is not None:
            return self._records

        if not self.snapshot_path.exists():
            raise StoreError(f"Snapshot file not found: {self.snapshot_path}")

        try:
            with open(self.snapshot_path, 'r', encoding='utf-8-sig') as f:
                content = f.read().strip()
            data = json.loads(content) if content else []
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read snapshot {self.snapshot_path}: {e}")
            raise StoreError(f"Failed to read snapshot: {e}") from e

        if isinstance(data, dict):
            data = data.get("records", [])
        if not isinstance(data, list):
            raise StoreError("Snapshot must contain a list of records")

        self._records = parse_records(data)
        logger.info(f"Loaded {len(self._records)} records from snapshot")
        return self._records

    def find_records(self, filters: SearchFilters) -> list[Record]:
        return [record for record in self.load() if filters.matches(record)]

    def list_labels(self) -> list[str]:
        labels: list[str] = []
        for record in self.load():
            for label in record.labels:
                if label not in labels:
                    labels.append(label)
        return labels

    def ping(self) -> bool:
        try:
            self.load()
            return True
        except StoreError:
            return False

    def close(self) -> None:
        if self._from_file:
            self._records = None

    def __len__(self) -> int:
        return len(self.load())


def parse_records(items: list[Any]) -> list[Record]:
    """
    Validate raw record dictionaries.

    Raises:
        StoreError: If an entry is not a valid record
    """
    try:
        return [Record.model_validate(item) for item in items]
    except PydanticValidationError as e:
        raise StoreError(f"Malformed record in snapshot: {e}") from e
