"""
Response Shaper

Projects scored matches into the public result payload. Sensitive
properties are stripped from every record here even though the scorer
already ignores them: a record may carry them and they must never leave
the service.
"""

from typing import Any, Optional

from propgraph.config import SearchConfig
from propgraph.models.graph import Record
from propgraph.models.search import PublicScoredMatch, ScoredMatch


UNKNOWN_NODE_ID = "unknown"


class ResponseShaper:
    """Sanitizes scored matches for output."""

    def __init__(self, config: SearchConfig):
        self.config = config

    def sanitize_properties(self, properties: Optional[dict[str, Any]]) -> dict[str, Any]:
        return {
            key: value
            for key, value in (properties or {}).items()
            if key not in self.config.sensitive_properties
        }

    @staticmethod
    def node_id(record: Record) -> str:
        properties = record.properties or {}
        node_id = properties.get("nodeId") or record.element_id
        return str(node_id) if node_id else UNKNOWN_NODE_ID

    def shape_one(self, match: ScoredMatch) -> PublicScoredMatch:
        return PublicScoredMatch(
            node_id=self.node_id(match.record),
            labels=list(match.record.labels),
            properties=self.sanitize_properties(match.record.properties),
            score=match.score,
            matched_property=match.matched_property,
            match_type=match.match_type,
        )

    def shape(self, matches: list[ScoredMatch]) -> list[PublicScoredMatch]:
        """
        Build public results, preserving order.

        Args:
            matches: Ranked matches

        Returns:
            List of PublicScoredMatch with sensitive properties removed
        """
        return [self.shape_one(match) for match in matches]
