"""
Event registration API application.

Wires the v1 router (availability cascade, registrations, admin) into a
FastAPI app whose lifespan owns the PostgreSQL connection pool.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.api.v1 import router as v1_router
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

tags_metadata = [
    {
        "name": "v1",
        "description": "Event availability and registration for end users",
    },
    {
        "name": "admin",
        "description": "Event configuration, registration review and CSV export",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the pool and bring the events/registrations schema up to date.

    The pool is published on app.state for the repository dependencies and
    closed on shutdown.
    """
    settings = get_settings()

    logger.info(
        "Opening connection pool (min=%s, max=%s)",
        settings.pool_min_size,
        settings.pool_max_size,
    )
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )

    run_migrations(pool)
    app.state.pool = pool
    logger.info("Event registration API ready")

    yield

    pool.close()
    logger.info("Connection pool closed")


app = FastAPI(
    title="event-registration",
    description="Time-windowed event registration API - availability cascade, "
    "duplicate-safe registration and CSV export",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str]:
    """
    Liveness plus a round trip to the registrations database.

    A failed probe surfaces as a 500 so orchestrators stop routing traffic.
    """
    pool = request.app.state.pool
    with pool.connection() as conn:
        conn.execute("SELECT 1")

    return {"status": "healthy"}
