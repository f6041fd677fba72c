"""
Competitor Finder API

FastAPI application exposing:
1. POST /api/competitors/verified - verified competitor stores for a niche
2. GET  /api/competitors/resolve  - niche normalization preview
3. GET  /health                   - liveness and database status
"""

import logging
import sys

from fastapi import FastAPI

from src import __version__
from src.database import check_db_connection, init_db
from src.utils.config import get_settings
from .competitors import router as competitors_router

# Configure logging to stdout
logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
    force=True,
)
logger = logging.getLogger(__name__)

# Quiet down chatty loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

app = FastAPI(
    title="Niche Competitor Finder",
    description="Live, high-ticket dropshipping competitors for an e-commerce niche",
    version=__version__,
)

app.include_router(competitors_router)


# ============================================================================
# STARTUP - Initialize Database
# ============================================================================

@app.on_event("startup")
async def startup_event():
    """Initialize database on startup."""
    logger.info("Initializing database...")
    try:
        init_db()
        if not check_db_connection():
            logger.warning("Database connection check failed - continuing anyway")
    except Exception as e:
        # Competitor lookups work without the curated store tables
        logger.error(f"Database initialization failed: {e}")


@app.get("/health")
async def health():
    """Service health."""
    return {
        "status": "healthy",
        "version": __version__,
        "database": check_db_connection(),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
