"""
Search Filter Builder

Turns the free-text query and the raw filter parameters of a search
request into the structured SearchFilters handed to the record store.

Parameter formats:
- label=Author,Source            include labels (a record needs any one)
- excludeLabel=Draft             exclude labels
- property=era:ancient,lang:grc  property equality / list membership

The configured label blacklist is always merged into the exclude list;
callers cannot remove it.
"""

import logging
from typing import Optional

from propgraph.config import SearchConfig
from propgraph.exceptions import ValidationError
from propgraph.models.search import RawSearchFilters, SearchFilters

logger = logging.getLogger(__name__)


def split_list(raw: Optional[str]) -> list[str]:
    """
    Split a comma-separated parameter into trimmed, non-empty items.

    Example:
        >>> split_list(" Author, ,Source ")
        ['Author', 'Source']
    """
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def parse_property_filters(raw: Optional[str]) -> dict[str, str]:
    """
    Parse ``key:value`` pairs from a comma-separated parameter.

    Each pair is split on ``:``; the first two trimmed parts are key and
    value and anything after a second colon is ignored. Pairs without a
    key or a value are dropped instead of failing the request.

    Example:
        >>> parse_property_filters("era:ancient, broken, :x, lang:grc")
        {'era': 'ancient', 'lang': 'grc'}
    """
    filters: dict[str, str] = {}
    for pair in (raw or "").split(","):
        parts = [part.strip() for part in pair.split(":")]
        key = parts[0]
        value = parts[1] if len(parts) > 1 else ""
        if key and value:
            filters[key] = value
        elif pair.strip():
            logger.debug(f"Dropping malformed property filter: {pair!r}")
    return filters


class FilterBuilder:
    """
    Builds SearchFilters for a search request.

    Pure transformation: no store access, no side effects.

    Example:
        >>> builder = FilterBuilder(SearchConfig())
        >>> f = builder.build("homer", RawSearchFilters(label="Author"))
        >>> f.include_labels, f.exclude_labels
        (('Author',), ('User',))
    """

    def __init__(self, config: SearchConfig):
        self.config = config

    def validate_query(self, query: Optional[str]) -> str:
        """Return the query unchanged, or raise ValidationError if too short."""
        if query is None or len(query.strip()) < self.config.min_query_length:
            raise ValidationError(
                f"Search query must be at least {self.config.min_query_length} characters"
            )
        return query

    def build(self, query: Optional[str], raw: Optional[RawSearchFilters] = None) -> SearchFilters:
        """
        Validate the query and build the structural filter.

        Args:
            query: Free-text search query
            raw: Unparsed filter parameters (all optional)

        Returns:
            SearchFilters with the blacklist merged into exclude_labels

        Raises:
            ValidationError: If the trimmed query is shorter than the minimum
        """
        self.validate_query(query)
        raw = raw or RawSearchFilters()

        include = split_list(raw.label)
        blacklist = sorted(self.config.blacklisted_labels)

        exclude: list[str] = []
        for label in split_list(raw.exclude_label) + blacklist:
            if label not in exclude:
                exclude.append(label)

        properties = parse_property_filters(raw.property)

        return SearchFilters(
            include_labels=tuple(include) if include else None,
            exclude_labels=tuple(exclude),
            property_filters=tuple(properties.items()),
            blacklisted_labels=tuple(blacklist),
        )
