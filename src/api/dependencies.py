"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresEventRepository, PostgresRegistrationRepository
from src.adapters.smtp.console import ConsoleNotificationDispatcher
from src.config.settings import get_settings
from src.domain.admin import AdminQueryService
from src.domain.availability import AvailabilityResolver
from src.domain.catalog import EventCatalog, EventConfigService
from src.domain.export import CsvExporter
from src.domain.registration import RegistrationService


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_event_repository(request: Request) -> PostgresEventRepository:
    """Create event repository with connection pool from app state."""
    return PostgresEventRepository(get_pool(request))


def get_registration_repository(request: Request) -> PostgresRegistrationRepository:
    """Create registration repository with connection pool from app state."""
    settings = get_settings()
    return PostgresRegistrationRepository(get_pool(request), fetch_size=settings.export_fetch_size)


@lru_cache
def get_notification_dispatcher() -> ConsoleNotificationDispatcher:
    """Get console notification dispatcher (singleton, configured from settings)."""
    settings = get_settings()
    return ConsoleNotificationDispatcher(
        admin_email=settings.admin_email,
        notify_user=settings.enable_user_notification,
        notify_admin=settings.enable_admin_notification,
        site_name=settings.site_name_in_email,
    )


def get_event_catalog(
    repository: PostgresEventRepository = Depends(get_event_repository),
) -> EventCatalog:
    return EventCatalog(repository=repository)


def get_availability_resolver(
    catalog: EventCatalog = Depends(get_event_catalog),
) -> AvailabilityResolver:
    return AvailabilityResolver(catalog=catalog)


def get_event_config_service(
    repository: PostgresEventRepository = Depends(get_event_repository),
) -> EventConfigService:
    return EventConfigService(repository=repository)


def get_registration_service(
    catalog: EventCatalog = Depends(get_event_catalog),
    repository: PostgresRegistrationRepository = Depends(get_registration_repository),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the catalog, repository and notification dispatcher.
    """
    return RegistrationService(
        catalog=catalog,
        repository=repository,
        dispatcher=get_notification_dispatcher(),
    )


def get_admin_query_service(
    catalog: EventCatalog = Depends(get_event_catalog),
    repository: PostgresRegistrationRepository = Depends(get_registration_repository),
) -> AdminQueryService:
    return AdminQueryService(catalog=catalog, repository=repository)


def get_csv_exporter() -> CsvExporter:
    """New exporter per request; it owns a row buffer."""
    return CsvExporter()
