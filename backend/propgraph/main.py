"""
PropGraph - Property Graph Browser API

Main FastAPI application entry point.

This module:
- Connects the record store (Neo4j, or the JSON snapshot as fallback)
- Builds the search engine
- Wires up API routers
- Handles startup/shutdown events

To run the server:
    uvicorn propgraph.main:app --reload --host 0.0.0.0 --port 8000

API Documentation:
    - Swagger UI: http://localhost:8000/docs
    - ReDoc: http://localhost:8000/redoc
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from propgraph.config import settings, get_search_config, get_snapshot_path
from propgraph.exceptions import StoreError
from propgraph.services.graph_store import GraphStore
from propgraph.services.record_store import RecordStore
from propgraph.services.search_engine import SearchEngine
from propgraph.services.snapshot import SnapshotStore
from propgraph.api import search_router, labels_router

# =============================================================================
# Logging Configuration
# =============================================================================
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# =============================================================================
# Global Service Instances
# =============================================================================
# These are initialized during startup and used by API route dependencies

record_store: RecordStore = None
search_engine: SearchEngine = None


def connect_record_store() -> RecordStore:
    """
    Connect to Neo4j, falling back to the JSON snapshot.

    Returns:
        The connected record store, or None if neither is available
    """
    try:
        store = GraphStore()
        logger.info("Neo4j connected successfully")
        return store
    except StoreError as e:
        logger.warning(f"Failed to connect to Neo4j: {e}")

    snapshot_path = get_snapshot_path()
    if settings.snapshot_fallback and snapshot_path.exists():
        logger.warning(f"Serving records from snapshot {snapshot_path} (degraded mode)")
        return SnapshotStore(snapshot_path)

    logger.warning("Running without a record store - search will fail")
    return None


# =============================================================================
# Application Lifecycle
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: Connect the record store, build the search engine
    - Shutdown: Close connections
    """
    global record_store, search_engine

    logger.info("=" * 60)
    logger.info("PropGraph starting up...")
    logger.info("=" * 60)

    record_store = connect_record_store()

    if record_store is not None:
        search_engine = SearchEngine(store=record_store, config=get_search_config())
        logger.info("Search engine initialized")
    else:
        search_engine = None
        logger.warning("Search engine not available (no record store)")

    logger.info("PropGraph startup complete!")

    # Yield control to the application
    yield

    logger.info("PropGraph shutting down...")

    if record_store is not None:
        record_store.close()

    logger.info("PropGraph shutdown complete")


# =============================================================================
# FastAPI Application
# =============================================================================

app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# =============================================================================
# CORS Middleware
# =============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Adjust for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# API Routers
# =============================================================================
app.include_router(search_router)
app.include_router(labels_router)


# =============================================================================
# Root Endpoints
# =============================================================================

@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint - basic API information.
    """
    return {
        "name": "PropGraph",
        "description": "Property graph browser with ranked search",
        "version": settings.api_version,
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint.

    Reports whether the record store is reachable and which backend is in use.
    """
    store_ok = record_store is not None and record_store.ping()

    health_status = {
        "status": "healthy" if store_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {
            "record_store": {
                "status": "healthy" if store_ok else "unavailable",
                "backend": type(record_store).__name__ if record_store is not None else None
            },
            "search_engine": {
                "status": "healthy" if search_engine else "unavailable"
            }
        }
    }

    if isinstance(record_store, SnapshotStore):
        health_status["status"] = "degraded"
        health_status["message"] = "Neo4j not connected - serving snapshot records"
    elif not store_ok:
        health_status["message"] = "Record store not reachable - search unavailable"

    return health_status


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "propgraph.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower()
    )
