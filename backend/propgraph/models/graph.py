"""
Graph Data Models

This module defines Pydantic models for graph entities:
- Record: a node from the graph store with its labels and properties

Property values are heterogeneous. The store hands back one of:
- a single string
- a single non-string scalar (number, boolean, temporal value)
- an ordered list (of strings, for the values search cares about)

These models are used for:
- Record store results (Neo4j and JSON snapshot)
- Input to the match scorer and response shaper
"""

from typing import Any, Optional, Union
from pydantic import BaseModel, Field


# Scalar string, non-string scalar, or list of values
PropertyValue = Union[str, int, float, bool, list[Any]]


class Record(BaseModel):
    """
    A node retrieved from the record store.

    Attributes:
        labels: Category tags on the node (order irrelevant, may be empty)
        properties: Property key -> value map. ``None`` marks a malformed
            record, which is scored as "no properties, no match".
        element_id: Store-assigned identifier, when the store has one
    """
    labels: list[str] = Field(
        default_factory=list,
        description="Labels carried by the node"
    )
    properties: Optional[dict[str, Any]] = Field(
        default=None,
        description="Node properties"
    )
    element_id: Optional[str] = Field(
        default=None,
        description="Store element id"
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "example": {
                "labels": ["Author"],
                "properties": {
                    "nodeId": "author_homer",
                    "name": "Homer",
                    "tags": ["ancient", "greek", "epic"]
                },
                "element_id": "4:7c9a:12"
            }
        }

    def has_any_label(self, labels) -> bool:
        """Return True if the record carries at least one of ``labels``."""
        return any(label in labels for label in self.labels)
