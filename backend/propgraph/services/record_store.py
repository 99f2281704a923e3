"""
Record Store Interface

The search engine depends on one capability of the graph store: run a
structural filter and return the matching records with their labels and
properties. Any object with these methods can back the engine.
"""

from typing import Protocol, runtime_checkable

from propgraph.models.graph import Record
from propgraph.models.search import SearchFilters


@runtime_checkable
class RecordStore(Protocol):
    """
    Source of candidate records.

    Implementations raise ``propgraph.exceptions.StoreError`` on failure.
    """

    def find_records(self, filters: SearchFilters) -> list[Record]:
        """
        Return every record that:
        - carries one of ``filters.include_labels`` (any record if None)
        - carries none of ``filters.exclude_labels``
        - satisfies every entry of ``filters.property_filters``
        """
        ...

    def list_labels(self) -> list[str]:
        """Return every label present in the store."""
        ...

    def ping(self) -> bool:
        """Return True if the store is reachable."""
        ...

    def close(self) -> None:
        ...
