"""
Search Request/Response Models

This module defines the models of the search flow:
- SearchFilters: structural filter handed to the record store
- ScoredMatch: best match of one record against the query
- PublicScoredMatch / SearchResponse: sanitized payload returned to callers
- LabelsResponse: label browsing payload

Internal values (SearchFilters, ScoredMatch) are frozen dataclasses built
fresh per request. Response models are Pydantic models serialized with
camelCase aliases (totalMatches, matchedProperty, ...).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from propgraph.models.graph import Record


class MatchType(str, Enum):
    """How a candidate value related to the query text."""
    EXACT = "exact"
    PREFIX = "prefix"
    SUBSTRING = "substring"


# =============================================================================
# Internal Search Values
# =============================================================================

@dataclass(frozen=True)
class RawSearchFilters:
    """
    Unparsed filter parameters exactly as the caller supplied them.

    Attributes:
        label: Comma-separated labels to include (OR)
        exclude_label: Comma-separated labels to exclude
        property: Comma-separated ``key:value`` pairs
    """
    label: Optional[str] = None
    exclude_label: Optional[str] = None
    property: Optional[str] = None


@dataclass(frozen=True)
class SearchFilters:
    """
    Structural filter sent to the record store.

    Attributes:
        include_labels: A record matches only if it carries one of these.
            ``None`` means no label restriction.
        exclude_labels: A record carrying any of these is rejected. Always
            contains every blacklisted label.
        property_filters: Property key -> required value. A record matches
            when the property equals the value, or is a list containing it.
        blacklisted_labels: The fixed blacklist merged into exclude_labels
    """
    include_labels: Optional[tuple[str, ...]] = None
    exclude_labels: tuple[str, ...] = ()
    property_filters: tuple[tuple[str, str], ...] = ()
    blacklisted_labels: tuple[str, ...] = ()

    @property
    def property_map(self) -> dict[str, str]:
        return dict(self.property_filters)

    def is_blacklisted(self, record: Record) -> bool:
        return record.has_any_label(self.blacklisted_labels)

    def matches(self, record: Record) -> bool:
        """
        Evaluate this filter against a record in memory.

        Mirrors the semantics the Neo4j store applies in Cypher, so that
        stores without a query language behave identically.
        """
        if self.include_labels is not None and not record.has_any_label(self.include_labels):
            return False
        if record.has_any_label(self.exclude_labels):
            return False

        properties = record.properties or {}
        for key, required in self.property_filters:
            if key not in properties:
                return False
            value = properties[key]
            if isinstance(value, list):
                if required not in value:
                    return False
            elif value != required:
                return False
        return True


@dataclass(frozen=True)
class ScoredMatch:
    """
    Result of scoring one record against the query text.

    A score of 0 means "no match"; matched_property and match_type are
    then None.
    """
    record: Record
    score: float = 0.0
    matched_property: Optional[str] = None
    match_type: Optional[MatchType] = None

    @property
    def is_match(self) -> bool:
        return self.score > 0


@dataclass
class RankedResults:
    """Ranked, truncated matches with the pre-truncation match count."""
    results: list[ScoredMatch] = field(default_factory=list)
    total_matches: int = 0


# =============================================================================
# Response Models
# =============================================================================

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PublicScoredMatch(_CamelModel):
    """
    A scored record safe to return to callers.

    Sensitive properties have been removed.
    """
    node_id: str = Field(..., description="nodeId property or store element id")
    labels: list[str] = Field(default_factory=list, description="Node labels")
    properties: dict[str, Any] = Field(
        default_factory=dict,
        description="Sanitized node properties"
    )
    score: float = Field(..., ge=0.0, description="Relevance score")
    matched_property: Optional[str] = Field(
        default=None,
        description="Property key that produced the best score"
    )
    match_type: Optional[MatchType] = Field(
        default=None,
        description="exact, prefix or substring"
    )


class FiltersEcho(_CamelModel):
    """Filters applied to a search, echoed back in the response."""
    labels: Optional[list[str]] = None
    exclude_labels: list[str] = Field(default_factory=list)
    properties: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_filters(cls, filters: SearchFilters) -> "FiltersEcho":
        return cls(
            labels=list(filters.include_labels) if filters.include_labels is not None else None,
            exclude_labels=list(filters.exclude_labels),
            properties=filters.property_map,
        )


class SearchResponse(_CamelModel):
    """
    Response model for a ranked search.

    ``total_matches`` counts every record with a non-zero score, before
    the ``limit`` truncation; ``returned`` is the length of ``results``.
    """
    success: bool = True
    query: str = Field(..., description="The original search query")
    filters: FiltersEcho = Field(default_factory=FiltersEcho)
    results: list[PublicScoredMatch] = Field(
        default_factory=list,
        description="Matches ordered by score (descending)"
    )
    total_matches: int = Field(..., ge=0, description="Matches before truncation")
    limit: int = Field(..., ge=1, description="Result cap applied")
    returned: int = Field(..., ge=0, description="Number of results returned")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "success": True,
                "query": "homer",
                "filters": {"labels": ["Author"], "excludeLabels": ["User"], "properties": {}},
                "results": [
                    {
                        "nodeId": "author_homer",
                        "labels": ["Author"],
                        "properties": {"nodeId": "author_homer", "name": "Homer"},
                        "score": 600.0,
                        "matchedProperty": "name",
                        "matchType": "exact"
                    }
                ],
                "totalMatches": 1,
                "limit": 50,
                "returned": 1
            }
        },
    )


class LabelsResponse(BaseModel):
    """Labels present in the graph, minus blacklisted and hidden ones."""
    success: bool = True
    labels: list[str] = Field(default_factory=list)
    count: int = 0
