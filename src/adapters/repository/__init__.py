"""Repository adapters - Database implementations."""

from .postgres import PostgresEventRepository, PostgresRegistrationRepository, run_migrations

__all__ = ["PostgresEventRepository", "PostgresRegistrationRepository", "run_migrations"]
