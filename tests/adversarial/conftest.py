"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for concurrent registration tests.
"""

from collections.abc import Generator
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for adversarial tests."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=20,
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

