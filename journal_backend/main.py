"""
FastAPI application bootstrap with: \n
- Lifespan-managed logging setup, schema creation and DAO registry \n
- CORS configured for the frontend \n
- The journal API router \n

Environment contract (from `settings`): \n
- INIT_MODE: if 'runtime', create missing tables during app startup. \n
- FRONTEND_URL: allowed CORS origin. \n
- LOG_LEVEL: root log level. \n
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from journal_backend.api.fast_api import router
from journal_backend.database.config.config import settings
from journal_backend.database.config.connection_engine import connection_engine, metadata
from journal_backend.database.daos.dao_registry import DAORegistry
from journal_backend.database.entities import tables  # noqa: F401  (registers the tables on `metadata`)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    App lifespan manager.

    Notes
    ------------
    - On startup (before yielding):
        * Configure logging from LOG_LEVEL.
        * If INIT_MODE == 'runtime': create missing tables.
        * Build the application's `DAORegistry` and attach it to `app.state`.
    - On shutdown (after yielding):
        * Dispose of the engine's connection pool.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if settings.INIT_MODE == "runtime":
        metadata.create_all(connection_engine)
        logger.info("Database schema ready.")
    else:
        logger.info(f"Skipping runtime init (INIT_MODE={settings.INIT_MODE}).")

    app.state.dao_registry = DAORegistry()

    try:
        yield
    finally:
        connection_engine.dispose()
        logger.info("App shutting down.")


# Instantiate the FastAPI app with lifespan handler
app = FastAPI(lifespan=lifespan)
"""FastAPI application object; `lifespan` prepares the schema and the DAO registry."""

# -----------------------
# CORS configuration
# -----------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -----------------------
# API routes
# -----------------------
app.include_router(router)
