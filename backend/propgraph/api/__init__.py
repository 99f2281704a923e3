"""
API routes package.

Contains FastAPI routers for:
- /search - Ranked free-text search
- /labels - Label browsing
"""

from propgraph.api.search import router as search_router
from propgraph.api.labels import router as labels_router

__all__ = [
    "search_router",
    "labels_router",
]
