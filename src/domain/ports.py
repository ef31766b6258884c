"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.

Error contract for all repository methods:
- Unexpected storage faults are raised as StorageFailure.
- RegistrationRepository.add_registration raises DuplicateRegistration when
  the storage layer rejects the row on its (email, event_date) uniqueness
  constraint.
"""

from collections.abc import Iterator
from datetime import date
from typing import Protocol

from .models import Event, NewEvent, NewRegistration, RegistrationDetail, RegistrationNotification


class EventRepository(Protocol):
    """Port interface for event persistence."""

    def add_event(self, event: NewEvent) -> int:
        """
        Persist a new event.

        Returns:
            The new event id
        """
        ...

    def get_event(self, event_id: int) -> Event | None:
        """Fetch one event, or None if no such id exists."""
        ...

    def list_events(self) -> list[Event]:
        """All events ordered by event_date ascending."""
        ...

    def list_event_dates(self, descending: bool = True) -> list[date]:
        """Distinct event dates across all events."""
        ...

    def list_events_on_date(self, event_date: date) -> list[tuple[int, str]]:
        """(id, name) pairs for events on the given date, ordered by name."""
        ...

    def list_event_dates_with_registrations(self) -> list[date]:
        """Distinct event dates with at least one registration, descending."""
        ...


class RegistrationRepository(Protocol):
    """Port interface for registration persistence."""

    def add_registration(self, registration: NewRegistration) -> int:
        """
        Persist a new registration.

        Args:
            registration: Validated registration, including the event date
                used for the uniqueness constraint

        Returns:
            The new registration id
        """
        ...

    def has_registration(self, email: str, event_date: date) -> bool:
        """
        Check for an existing registration by email on an event date.

        The email comparison is exact (case-sensitive), following the
        registration's event_id to the owning event's date.
        """
        ...

    def list_registrations(self, event_id: int | None = None) -> list[RegistrationDetail]:
        """Registrations ordered by created_at descending, optionally for one event."""
        ...

    def iter_registrations(self, event_id: int | None = None) -> Iterator[RegistrationDetail]:
        """Same rows as list_registrations, produced lazily."""
        ...

    def count_registrations(self, event_id: int) -> int:
        """Number of registrations for an event."""
        ...


class NotificationDispatcher(Protocol):
    """Port interface for registration notifications."""

    def send_registration_confirmation(self, notification: RegistrationNotification) -> None:
        """
        Deliver confirmation (and admin) notifications.

        Raises:
            NotificationFailure: If any delivery fails
        """
        ...
