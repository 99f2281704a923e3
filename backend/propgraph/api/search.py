"""
Search API Routes

This module provides the REST endpoint for ranked search:
- GET /search - Free-text search with label and property filters

Ranking: exact > prefix > substring matches, with display_name / name /
title matches boosted and shorter matched values preferred. Records with
a blacklisted label (e.g. User) never appear.
"""

import logging
from typing import Optional
from fastapi import APIRouter, HTTPException, Depends, Query
from fastapi.responses import JSONResponse

from propgraph.exceptions import StoreError, ValidationError
from propgraph.models.search import RawSearchFilters, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["Search"])

SEARCH_EXAMPLE = "GET /search?q=homer"


# Dependency injection for services
def get_search_engine():
    """Dependency to get SearchEngine instance."""
    from propgraph.main import search_engine
    if search_engine is None:
        raise HTTPException(status_code=503, detail="Record store not available")
    return search_engine


@router.get(
    "",
    response_model=SearchResponse,
    summary="Ranked free-text search",
    description="""
    Search node properties for the query text and return ranked matches.

    **Filtering:**
    - `label`: Comma-separated labels; a node needs at least one of them
    - `excludeLabel`: Comma-separated labels to exclude
    - `property`: Comma-separated `key:value` pairs; the node property must
      equal the value, or be a list containing it. Malformed pairs are ignored.

    **Response:** `totalMatches` counts every match before `limit` is applied;
    `returned` is the number of results in this response.
    """
)
async def search(
    q: Optional[str] = Query(default=None, description="Search text (at least 2 characters)"),
    label: Optional[str] = Query(default=None, description="Include labels, comma-separated"),
    exclude_label: Optional[str] = Query(
        default=None,
        alias="excludeLabel",
        description="Exclude labels, comma-separated"
    ),
    property_filter: Optional[str] = Query(
        default=None,
        alias="property",
        description="key:value pairs, comma-separated"
    ),
    limit: Optional[str] = Query(default=None, description="Maximum results, a positive integer (default 50)"),
    search_engine=Depends(get_search_engine)
):
    """
    Perform a ranked search.

    Errors are returned as flat JSON bodies:
        400 {"error", "example"}: query too short, limit not a positive integer
        500 {"error": "Search failed", "details"}: record store failure
    """
    raw_filters = RawSearchFilters(
        label=label,
        exclude_label=exclude_label,
        property=property_filter,
    )

    try:
        return search_engine.search(q, raw_filters, limit)

    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e), "example": SEARCH_EXAMPLE})
    except StoreError as e:
        logger.error(f"Search failed: {e}")
        return JSONResponse(status_code=500, content={"error": "Search failed", "details": str(e)})
