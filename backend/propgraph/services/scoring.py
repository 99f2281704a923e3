"""
Match Scorer

Scores a single record against the search text and keeps the best
(property, match type, score) triple across all of its properties.

Scoring a candidate value:
    base = 100 (exact) | 50 (prefix) | 25 (substring)
    base *= 3 if the property key is a priority property
    score = base * (1 + len(query) / len(candidate))

The length factor rewards matches where the query covers most of the
matched text. It is not capped: a candidate shorter than the query
cannot match it, so in practice the factor stays within (1, 2].

Example:
    Query "homer" against {"name": "Homer"}:
        exact, priority -> 100 * 3 * (1 + 5/5) = 600
    Query "homer" against {"name": "Homeric Hymns"}:
        prefix, priority -> 50 * 3 * (1 + 5/13) ≈ 207.7
"""

import logging
from typing import Iterator, Optional

from propgraph.config import SearchConfig
from propgraph.models.graph import PropertyValue, Record
from propgraph.models.search import MatchType, ScoredMatch

logger = logging.getLogger(__name__)


BASE_SCORES = {
    MatchType.EXACT: 100.0,
    MatchType.PREFIX: 50.0,
    MatchType.SUBSTRING: 25.0,
}

PRIORITY_MULTIPLIER = 3.0


def get_match_type(value: str, query_lower: str) -> Optional[MatchType]:
    """
    Classify how a candidate value relates to the (lower-cased) query.

    Returns:
        MatchType, or None if the value does not contain the query
    """
    value_lower = value.lower()
    if value_lower == query_lower:
        return MatchType.EXACT
    if value_lower.startswith(query_lower):
        return MatchType.PREFIX
    if query_lower in value_lower:
        return MatchType.SUBSTRING
    return None


def calculate_score(
    match_type: MatchType,
    candidate: str,
    query: str,
    is_priority: bool = False
) -> float:
    """
    Compute the relevance score of one matched candidate value.

    Args:
        match_type: How the candidate matched
        candidate: The matched string
        query: The search query
        is_priority: Whether the owning property key is a priority property

    Returns:
        Score > 0
    """
    score = BASE_SCORES[match_type]
    if is_priority:
        score *= PRIORITY_MULTIPLIER

    length_ratio = len(query) / len(candidate)
    return score * (1 + length_ratio)


def candidate_values(value: PropertyValue) -> Iterator[str]:
    """
    Yield the strings of a property value that are matched against the query.

    A string is its own candidate; a list contributes each string element;
    numbers, booleans and other scalars contribute nothing.
    """
    if isinstance(value, str):
        yield value
    elif isinstance(value, (list, tuple)):
        for item in value:
            if isinstance(item, str):
                yield item


class MatchScorer:
    """
    Scores records against a query text.

    Sensitive property keys are skipped entirely; priority keys get the
    3x boost. Both sets come from the injected SearchConfig.
    """

    def __init__(self, config: SearchConfig):
        self.config = config

    def score(self, record: Record, query: str) -> ScoredMatch:
        """
        Find the best-scoring property of a record.

        The first maximum wins: a later candidate with an equal score does
        not replace the current best.

        Args:
            record: Record to score
            query: Search text (matched case-insensitively)

        Returns:
            ScoredMatch; score 0 with no property/type when nothing matched
        """
        query_lower = query.lower()

        best_score = 0.0
        best_property: Optional[str] = None
        best_type: Optional[MatchType] = None

        for key, value in (record.properties or {}).items():
            if key in self.config.sensitive_properties:
                continue

            is_priority = key in self.config.priority_properties
            for candidate in candidate_values(value):
                if not candidate:
                    continue
                match_type = get_match_type(candidate, query_lower)
                if match_type is None:
                    continue

                score = calculate_score(match_type, candidate, query, is_priority)
                if score > best_score:
                    best_score = score
                    best_property = key
                    best_type = match_type

        return ScoredMatch(
            record=record,
            score=best_score,
            matched_property=best_property,
            match_type=best_type,
        )
