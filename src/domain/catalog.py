"""
Event catalog - read access to events plus administrative event creation.

Reads are fail-soft: a StorageFailure from the repository is logged and an
empty result is returned, so presentation code always has something to
render.
"""

import logging
from dataclasses import dataclass
from datetime import date

from .exceptions import InvalidField, RegistrationError, StorageFailure, ValidationFailed
from .models import Category, Event, NewEvent
from .ports import EventRepository
from .result import Err, Ok, Result
from .validation import is_valid_event_name, is_within_length, too_long_message

logger = logging.getLogger(__name__)


@dataclass
class EventCatalog:
    """Lookup and listing of events."""

    repository: EventRepository

    def get_by_id(self, event_id: int) -> Event | None:
        try:
            return self.repository.get_event(event_id)
        except StorageFailure as e:
            logger.error("Error fetching event %s: %s", event_id, e)
            return None

    def resolve(self, event_id: int) -> Event | None:
        """
        Look up an event for a write.

        Unlike get_by_id, a StorageFailure propagates so the caller can tell an
        outage apart from a missing event.
        """
        return self.repository.get_event(event_id)

    def list_all(self) -> list[Event]:
        """All events, event_date ascending."""
        try:
            return self.repository.list_events()
        except StorageFailure as e:
            logger.error("Error fetching events: %s", e)
            return []

    def list_distinct_event_dates(self, descending: bool = True) -> list[date]:
        try:
            return self.repository.list_event_dates(descending=descending)
        except StorageFailure as e:
            logger.error("Error fetching event dates: %s", e)
            return []

    def list_events_on_date(self, event_date: date | None) -> dict[int, str]:
        """Event id -> name for one date, ordered by name."""
        if not event_date:
            return {}
        try:
            return dict(self.repository.list_events_on_date(event_date))
        except StorageFailure as e:
            logger.error("Error fetching events for %s: %s", event_date, e)
            return {}

    def list_event_dates_with_registrations(self) -> list[date]:
        try:
            return self.repository.list_event_dates_with_registrations()
        except StorageFailure as e:
            logger.error("Error fetching event dates with registrations: %s", e)
            return []


@dataclass
class EventConfigService:
    """
    Administrative event creation.

    This is the only writer of events, so it is where the window invariant
    registration_start <= registration_end <= event_date is enforced.
    """

    repository: EventRepository

    def create_event(self, event: NewEvent) -> Result[int, RegistrationError]:
        """
        Validate and persist a new event.

        Returns:
            Ok(event_id), or Err(ValidationFailed) listing every violation,
            or Err(StorageFailure) if the insert failed
        """
        errors = self._validate(event)
        if errors:
            return Err(ValidationFailed(errors))

        try:
            event_id = self.repository.add_event(event)
        except StorageFailure as e:
            logger.error("Error saving event %r: %s", event.name, e)
            return Err(e)

        logger.info("Event created: id=%s name=%r", event_id, event.name)
        return Ok(event_id)

    def _validate(self, event: NewEvent) -> list[InvalidField]:
        errors: list[InvalidField] = []

        if not is_within_length(event.name):
            errors.append(InvalidField("name", too_long_message("Event name")))
        elif not is_valid_event_name(event.name):
            errors.append(
                InvalidField(
                    "name",
                    "Event name contains invalid characters. Only letters, numbers, "
                    "spaces, hyphens, and underscores are allowed.",
                )
            )

        if event.category not in {c.value for c in Category}:
            errors.append(InvalidField("category", "Unknown event category."))

        if event.registration_start > event.registration_end:
            errors.append(
                InvalidField(
                    "registration_start",
                    "Registration start date must be before or equal to the end date.",
                )
            )

        if event.registration_end > event.event_date:
            errors.append(
                InvalidField(
                    "registration_end",
                    "Registration end date must be before or on the event date.",
                )
            )

        return errors
