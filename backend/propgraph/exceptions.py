"""
PropGraph Exception Hierarchy

Each exception type maps to one failure mode of the search flow so the
HTTP layer can translate errors without parsing message strings.

Usage::

    from propgraph.exceptions import ValidationError, StoreError

    try:
        response = engine.search("homer", raw_filters)
    except ValidationError as exc:
        ...  # 400
    except StoreError as exc:
        ...  # 500
"""


class PropGraphError(Exception):
    """Base exception for all PropGraph errors."""


class ValidationError(PropGraphError, ValueError):
    """Malformed search input (query too short, non-positive limit).

    Raised before the record store is touched. Inherits from ``ValueError``
    so generic input-validation handlers keep working.
    """


class StoreError(PropGraphError):
    """The record store failed (connectivity, timeout, malformed response)."""
