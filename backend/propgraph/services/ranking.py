"""
Result Ranker

Scores every candidate record, drops non-matches, sorts by score and
truncates to the caller's limit.

Ordering rule: records with equal scores keep the order the record store
returned them in. Each candidate carries its original index as the sort
tie-break, so the result does not depend on how scoring was scheduled
(sequentially or on a thread pool).
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Union

from propgraph.config import SearchConfig
from propgraph.exceptions import ValidationError
from propgraph.models.graph import Record
from propgraph.models.search import RankedResults, ScoredMatch
from propgraph.services.scoring import MatchScorer

logger = logging.getLogger(__name__)


class ResultRanker:
    """
    Ranks candidate records for a query.

    Attributes:
        scorer: MatchScorer applied to each candidate
        config: Search policy (default limit, worker pool settings)

    Example:
        >>> ranker = ResultRanker(MatchScorer(config), config)
        >>> ranked = ranker.rank(records, "homer", limit=10)
        >>> ranked.total_matches, len(ranked.results)
        (2, 2)
    """

    def __init__(self, scorer: MatchScorer, config: SearchConfig):
        self.scorer = scorer
        self.config = config

    def resolve_limit(self, limit: Optional[Union[int, str]]) -> int:
        """
        Apply the default limit and reject non-positive values.

        A query-string limit arrives as text; an empty value means the default.
        """
        if isinstance(limit, str):
            limit = limit.strip() or None
        if limit is None:
            return self.config.default_limit
        if isinstance(limit, str):
            try:
                limit = int(limit, 10)
            except ValueError:
                raise ValidationError(f"Limit must be a positive integer, got {limit!r}") from None
        if limit <= 0:
            raise ValidationError(f"Limit must be a positive integer, got {limit}")
        return limit

    def score_all(self, records: list[Record], query: str) -> list[ScoredMatch]:
        """
        Score every record, in input order.

        Uses a thread pool when configured and the batch is large enough.
        ``Executor.map`` yields results in submission order.
        """
        use_pool = (
            self.config.max_workers > 1
            and len(records) >= self.config.parallel_threshold
        )
        if not use_pool:
            return [self.scorer.score(record, query) for record in records]

        logger.debug(f"Scoring {len(records)} candidates on {self.config.max_workers} workers")
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            return list(pool.map(lambda record: self.scorer.score(record, query), records))

    def rank(self, records: list[Record], query: str, limit: Optional[int] = None) -> RankedResults:
        """
        Rank candidate records against the query.

        Args:
            records: Candidates in the order the store returned them
            query: Search text
            limit: Maximum number of results (default from config)

        Returns:
            RankedResults; total_matches is counted before truncation

        Raises:
            ValidationError: If limit <= 0
        """
        limit = self.resolve_limit(limit)

        scored = self.score_all(records, query)
        matches = [
            (index, match)
            for index, match in enumerate(scored)
            if match.is_match
        ]

        matches.sort(key=lambda item: (-item[1].score, item[0]))

        return RankedResults(
            results=[match for _, match in matches[:limit]],
            total_matches=len(matches),
        )
