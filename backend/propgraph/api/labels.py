"""
Label API Routes

- GET /labels - Labels present in the graph, for label browsing

Blacklisted labels (e.g. User) and hidden labels (e.g. Entity) are
never listed.
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from propgraph.api.search import get_search_engine
from propgraph.exceptions import StoreError
from propgraph.models.search import LabelsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/labels", tags=["Labels"])


@router.get(
    "",
    response_model=LabelsResponse,
    summary="List labels",
    description="Retrieve every label in the graph except blacklisted and hidden ones."
)
async def list_labels(search_engine=Depends(get_search_engine)):
    try:
        labels = search_engine.list_labels()
    except StoreError as e:
        logger.error(f"Get labels error: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to get labels", "details": str(e)})

    logger.info(f"Found {len(labels)} labels")
    return LabelsResponse(labels=labels, count=len(labels))
