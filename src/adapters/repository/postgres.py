"""
PostgreSQL repository adapters - Implement the domain's repository protocols.

This module provides the PostgreSQL implementation of the domain's
EventRepository and RegistrationRepository ports using psycopg3 with raw SQL.

Error Translation:
-----------------
Domain code never sees psycopg exceptions. Every method translates:

1. **UniqueViolation** on ``uq_registrations_email_event_date`` into
   DuplicateRegistration. This constraint is the authoritative duplicate
   signal; the domain's pre-insert read cannot close the race between two
   concurrent submissions on its own.

2. **Any other psycopg.Error** into StorageFailure, which the domain turns
   into an empty read result or a failed write.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from pathlib import Path

import psycopg
from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.exceptions import DuplicateRegistration, StorageFailure
from src.domain.models import Event, NewEvent, NewRegistration, RegistrationDetail, parse_category

logger = logging.getLogger(__name__)

_UNIQUE_EMAIL_DATE = "uq_registrations_email_event_date"

_EVENT_COLUMNS = """
    id, event_name, category, event_date,
    registration_start_date, registration_end_date, created
"""

_REGISTRATION_SELECT = """
    SELECT r.id, r.full_name, r.email, r.college_name, r.department,
           r.category, r.event_id, r.created, e.event_name, e.event_date
    FROM registrations r
    JOIN events e ON r.event_id = e.id
"""


@contextmanager
def _storage_errors(action: str) -> Iterator[None]:
    """Re-raise psycopg errors as StorageFailure."""
    try:
        yield
    except psycopg.Error as e:
        logger.debug("Database error while %s: %s", action, e)
        raise StorageFailure(f"Database error while {action}") from e


def _row_to_event(row: tuple) -> Event:
    return Event(
        id=row[0],
        name=row[1],
        category=parse_category(row[2]),
        event_date=row[3],
        registration_start=row[4],
        registration_end=row[5],
        created_at=row[6],
    )


def _row_to_registration(row: tuple) -> RegistrationDetail:
    return RegistrationDetail(
        id=row[0],
        full_name=row[1],
        email=row[2],
        college_name=row[3],
        department=row[4],
        category=row[5],
        event_id=row[6],
        created_at=row[7],
        event_name=row[8],
        event_date=row[9],
    )


class PostgresEventRepository:
    """
    Implements EventRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def add_event(self, event: NewEvent) -> int:
        sql = """
            INSERT INTO events (event_name, category, event_date,
                                registration_start_date, registration_end_date, created)
            VALUES (%s, %s, %s, %s, %s, NOW())
            RETURNING id
        """
        with _storage_errors("saving event"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(
                    sql,
                    (
                        event.name,
                        event.category,
                        event.event_date,
                        event.registration_start,
                        event.registration_end,
                    ),
                )
                row = cursor.fetchone()
                conn.commit()
                return row[0]

    def get_event(self, event_id: int) -> Event | None:
        sql = f"SELECT {_EVENT_COLUMNS} FROM events WHERE id = %s"
        with _storage_errors("fetching event"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (event_id,))
                row = cursor.fetchone()
        return _row_to_event(row) if row is not None else None

    def list_events(self) -> list[Event]:
        sql = f"SELECT {_EVENT_COLUMNS} FROM events ORDER BY event_date ASC, id ASC"
        with _storage_errors("fetching events"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql)
                rows = cursor.fetchall()
        return [_row_to_event(row) for row in rows]

    def list_event_dates(self, descending: bool = True) -> list[date]:
        direction = "DESC" if descending else "ASC"
        sql = f"SELECT DISTINCT event_date FROM events ORDER BY event_date {direction}"
        with _storage_errors("fetching event dates"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql)
                rows = cursor.fetchall()
        return [row[0] for row in rows]

    def list_events_on_date(self, event_date: date) -> list[tuple[int, str]]:
        sql = """
            SELECT id, event_name FROM events
            WHERE event_date = %s
            ORDER BY event_name ASC
        """
        with _storage_errors("fetching events for date"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (event_date,))
                rows = cursor.fetchall()
        return [(row[0], row[1]) for row in rows]

    def list_event_dates_with_registrations(self) -> list[date]:
        sql = """
            SELECT DISTINCT e.event_date
            FROM events e
            JOIN registrations r ON e.id = r.event_id
            ORDER BY e.event_date DESC
        """
        with _storage_errors("fetching event dates with registrations"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql)
                rows = cursor.fetchall()
        return [row[0] for row in rows]


class PostgresRegistrationRepository:
    """
    Implements RegistrationRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: ConnectionPool, fetch_size: int = 500) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            fetch_size: Rows fetched per round trip when streaming
        """
        self._pool = pool
        self._fetch_size = fetch_size

    def add_registration(self, registration: NewRegistration) -> int:
        """
        Insert a registration.

        The UNIQUE (email, event_date) constraint rejects a second row for the
        same pair even when both inserts passed the domain's duplicate check.

        Raises:
            DuplicateRegistration: On the uniqueness constraint
            StorageFailure: On any other database error
        """
        sql = """
            INSERT INTO registrations (full_name, email, college_name, department,
                                       category, event_id, event_date, created)
            VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING id
        """
        params = (
            registration.full_name,
            registration.email,
            registration.college_name,
            registration.department,
            registration.category,
            registration.event_id,
            registration.event_date,
            registration.created_at,
        )
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
                conn.commit()
                return row[0]
        except errors.UniqueViolation as e:
            if e.diag.constraint_name == _UNIQUE_EMAIL_DATE:
                raise DuplicateRegistration(registration.email, registration.event_date) from e
            raise StorageFailure("Database error while saving registration") from e
        except psycopg.Error as e:
            raise StorageFailure("Database error while saving registration") from e

    def has_registration(self, email: str, event_date: date) -> bool:
        sql = """
            SELECT 1
            FROM registrations r
            JOIN events e ON r.event_id = e.id
            WHERE r.email = %s AND e.event_date = %s
            LIMIT 1
        """
        with _storage_errors("checking duplicate registration"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email, event_date))
                return cursor.fetchone() is not None

    def list_registrations(self, event_id: int | None = None) -> list[RegistrationDetail]:
        sql, params = self._registrations_query(event_id)
        with _storage_errors("fetching registrations"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                rows = cursor.fetchall()
        return [_row_to_registration(row) for row in rows]

    def iter_registrations(self, event_id: int | None = None) -> Iterator[RegistrationDetail]:
        """
        Stream registrations through a server-side (named) cursor.

        The connection stays checked out of the pool until the generator is
        exhausted or closed.
        """
        sql, params = self._registrations_query(event_id)
        with _storage_errors("streaming registrations"):
            with self._pool.connection() as conn:
                with conn.cursor(name="registrations_export") as cursor:
                    cursor.itersize = self._fetch_size
                    cursor.execute(sql, params)
                    for row in cursor:
                        yield _row_to_registration(row)

    def count_registrations(self, event_id: int) -> int:
        sql = "SELECT COUNT(*) FROM registrations WHERE event_id = %s"
        with _storage_errors("counting registrations"):
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (event_id,))
                return cursor.fetchone()[0]

    @staticmethod
    def _registrations_query(event_id: int | None) -> tuple[str, tuple]:
        if event_id is None:
            return f"{_REGISTRATION_SELECT} ORDER BY r.created DESC, r.id DESC", ()
        return (
            f"{_REGISTRATION_SELECT} WHERE r.event_id = %s ORDER BY r.created DESC, r.id DESC",
            (event_id,),
        )


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
