"""
Services package.

Contains core business logic:
- FilterBuilder: Query validation and structural filters
- MatchScorer: Per-record relevance scoring
- ResultRanker: Stable ranking and truncation
- ResponseShaper: Sensitive-property stripping
- SearchEngine: The composed search flow
- GraphStore: Neo4j record store
- SnapshotStore: JSON record store (offline fallback)
"""

from propgraph.services.filters import FilterBuilder
from propgraph.services.scoring import MatchScorer
from propgraph.services.ranking import ResultRanker
from propgraph.services.response import ResponseShaper
from propgraph.services.search_engine import SearchEngine
from propgraph.services.record_store import RecordStore
from propgraph.services.graph_store import GraphStore
from propgraph.services.snapshot import SnapshotStore

__all__ = [
    "FilterBuilder",
    "MatchScorer",
    "ResultRanker",
    "ResponseShaper",
    "SearchEngine",
    "RecordStore",
    "GraphStore",
    "SnapshotStore",
]
