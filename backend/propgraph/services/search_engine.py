"""
Search Engine

This module wires the search flow together:

    FilterBuilder -> RecordStore -> MatchScorer (per candidate)
                  -> ResultRanker -> ResponseShaper

1. Validate the query and limit (no store access on failure)
2. Build structural filters, blacklist merged in
3. Retrieve candidates from the record store
4. Drop blacklisted records the store let through
5. Score, rank and truncate
6. Strip sensitive properties and assemble the response

Errors:
- ValidationError for a short query or non-positive limit
- StoreError from the record store, propagated unchanged
A search that fails never degrades to an empty result.
"""

import logging
import time
from typing import Optional, Union

from propgraph.config import SearchConfig
from propgraph.models.search import FiltersEcho, RawSearchFilters, SearchResponse
from propgraph.services.filters import FilterBuilder
from propgraph.services.ranking import ResultRanker
from propgraph.services.record_store import RecordStore
from propgraph.services.response import ResponseShaper
from propgraph.services.scoring import MatchScorer

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Ranked free-text search over a record store.

    Stateless across requests: every call builds its own filters, candidate
    set and results.

    Attributes:
        store: Record store providing candidates
        config: Search policy shared by all components

    Example:
        >>> engine = SearchEngine(store, SearchConfig())
        >>> response = engine.search("homer", RawSearchFilters(label="Author"), limit=5)
        >>> [r.matched_property for r in response.results]
        ['name', 'name']
    """

    def __init__(self, store: RecordStore, config: SearchConfig):
        self.store = store
        self.config = config
        self.filter_builder = FilterBuilder(config)
        self.scorer = MatchScorer(config)
        self.ranker = ResultRanker(self.scorer, config)
        self.shaper = ResponseShaper(config)

    def search(
        self,
        query: str,
        raw_filters: Optional[RawSearchFilters] = None,
        limit: Optional[Union[int, str]] = None
    ) -> SearchResponse:
        """
        Run a ranked search.

        Args:
            query: Free-text query (at least min_query_length after trimming)
            raw_filters: Unparsed label/property filter parameters
            limit: Maximum number of results (default from config)

        Returns:
            SearchResponse with ranked results and totals

        Raises:
            ValidationError: If the query or limit is invalid
            StoreError: If the record store fails
        """
        start_time = time.time()

        filters = self.filter_builder.build(query, raw_filters)
        limit = self.ranker.resolve_limit(limit)

        logger.info(f"Searching for: {query!r}")
        logger.info(f"Filters: {filters}")

        candidates = self.store.find_records(filters)
        logger.info(f"Found {len(candidates)} candidate records")

        allowed = [record for record in candidates if not filters.is_blacklisted(record)]
        if len(allowed) != len(candidates):
            logger.warning(
                f"Record store returned {len(candidates) - len(allowed)} blacklisted records; dropped"
            )

        ranked = self.ranker.rank(allowed, query, limit)
        logger.info(f"Scored {ranked.total_matches} results out of {len(allowed)} records")

        if allowed and ranked.total_matches == 0:
            sample = allowed[0].properties or {}
            logger.warning(
                f"Found records but none matched; sample property keys: {list(sample)[:5]}"
            )

        results = self.shaper.shape(ranked.results)

        search_time_ms = (time.time() - start_time) * 1000
        logger.info(f"Returning {len(results)} scored results in {search_time_ms:.1f}ms")

        return SearchResponse(
            query=query,
            filters=FiltersEcho.from_filters(filters),
            results=results,
            total_matches=ranked.total_matches,
            limit=limit,
            returned=len(results),
        )

    def list_labels(self) -> list[str]:
        """
        List labels available for browsing.

        Blacklisted and hidden labels are removed.

        Raises:
            StoreError: If the record store fails
        """
        hidden = self.config.blacklisted_labels | self.config.hidden_labels
        return [label for label in self.store.list_labels() if label not in hidden]
