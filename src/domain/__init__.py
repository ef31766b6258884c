"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for time-windowed event
registration. It defines its own port interfaces for infrastructure
abstraction, ensuring true hexagonal architecture decoupling.
"""

from .admin import AdminQueryService
from .availability import AvailabilityResolver
from .catalog import EventCatalog, EventConfigService
from .exceptions import (
    DuplicateRegistration,
    EventUnavailable,
    InvalidEmail,
    InvalidField,
    NotificationFailure,
    RegistrationError,
    StorageFailure,
    ValidationFailed,
)
from .export import CsvExporter
from .models import Category, Event, OtherCategory, RegistrationDetail, RegistrationSubmission
from .ports import EventRepository, NotificationDispatcher, RegistrationRepository
from .registration import DuplicateGuard, RegistrationService
from .result import Err, Ok, Result

__all__ = [
    "AdminQueryService",
    "AvailabilityResolver",
    "Category",
    "CsvExporter",
    "DuplicateGuard",
    "DuplicateRegistration",
    "Err",
    "Event",
    "EventCatalog",
    "EventConfigService",
    "EventRepository",
    "EventUnavailable",
    "InvalidEmail",
    "InvalidField",
    "NotificationDispatcher",
    "NotificationFailure",
    "Ok",
    "OtherCategory",
    "RegistrationDetail",
    "RegistrationError",
    "RegistrationRepository",
    "RegistrationService",
    "RegistrationSubmission",
    "Result",
    "StorageFailure",
    "ValidationFailed",
]
