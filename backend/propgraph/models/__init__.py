"""
Data models package.

Contains models for:
- Graph entities (Record)
- Search filters, scored matches and responses
"""

from propgraph.models.graph import Record, PropertyValue
from propgraph.models.search import (
    MatchType,
    RawSearchFilters,
    SearchFilters,
    ScoredMatch,
    RankedResults,
    PublicScoredMatch,
    FiltersEcho,
    SearchResponse,
    LabelsResponse,
)

__all__ = [
    "Record",
    "PropertyValue",
    "MatchType",
    "RawSearchFilters",
    "SearchFilters",
    "ScoredMatch",
    "RankedResults",
    "PublicScoredMatch",
    "FiltersEcho",
    "SearchResponse",
    "LabelsResponse",
]
