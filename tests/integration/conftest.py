"""
Shared fixtures for integration tests.

Requires PostgreSQL to be running (via docker-compose) at DATABASE_URL.
Migrations are applied once per session; tables are emptied before each test.
"""

from collections.abc import Callable, Generator
from datetime import date, timedelta

import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import (
    PostgresEventRepository,
    PostgresRegistrationRepository,
    run_migrations,
)
from src.config.settings import get_settings
from src.domain.models import NewEvent


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for integration tests and apply migrations."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=True,
    )
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture(autouse=True)
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean registrations and events before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM registrations")
        conn.execute("DELETE FROM events")
        conn.commit()
    yield


@pytest.fixture
def event_repository(pool: ConnectionPool) -> PostgresEventRepository:
    return PostgresEventRepository(pool)


@pytest.fixture
def registration_repository(pool: ConnectionPool) -> PostgresRegistrationRepository:
    return PostgresRegistrationRepository(pool, fetch_size=2)


@pytest.fixture
def open_event() -> Callable[..., NewEvent]:
    """Factory for events whose registration window contains today."""

    def _open_event(
        name: str = "Build Weekend",
        category: str = "hackathon",
        days_until_event: int = 20,
    ) -> NewEvent:
        today = date.today()
        return NewEvent(
            name=name,
            category=category,
            event_date=today + timedelta(days=days_until_event),
            registration_start=today - timedelta(days=5),
            registration_end=today + timedelta(days=5),
        )

    return _open_event
