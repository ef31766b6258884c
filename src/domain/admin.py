"""
Administrative queries over registrations.

Read-only and fail-soft: storage faults are logged and degrade to empty
results. Used by the admin listing and the CSV export.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date

from .catalog import EventCatalog
from .exceptions import StorageFailure
from .models import RegistrationDetail
from .ports import RegistrationRepository

logger = logging.getLogger(__name__)


@dataclass
class AdminQueryService:
    """Filtered listing and counting of registrations."""

    catalog: EventCatalog
    repository: RegistrationRepository

    def registrations_for_event(self, event_id: int) -> list[RegistrationDetail]:
        """Registrations for one event, newest first."""
        try:
            return self.repository.list_registrations(event_id)
        except StorageFailure as e:
            logger.error("Error fetching registrations for event %s: %s", event_id, e)
            return []

    def count_for_event(self, event_id: int) -> int:
        try:
            return self.repository.count_registrations(event_id)
        except StorageFailure as e:
            logger.error("Error counting registrations for event %s: %s", event_id, e)
            return 0

    def all_registrations(self, event_id: int | None = None) -> list[RegistrationDetail]:
        """All registrations (optionally for one event), newest first."""
        try:
            return self.repository.list_registrations(event_id)
        except StorageFailure as e:
            logger.error("Error fetching registrations: %s", e)
            return []

    def iter_registrations(self, event_id: int | None = None) -> Iterator[RegistrationDetail]:
        """
        Lazily yield the same rows as all_registrations.

        A storage fault ends the stream early; rows already yielded stay valid.
        """
        try:
            yield from self.repository.iter_registrations(event_id)
        except StorageFailure as e:
            logger.error("Registration stream aborted: %s", e)

    def event_dates(self) -> list[date]:
        """All event dates, newest first, for the admin date filter."""
        return self.catalog.list_distinct_event_dates(descending=True)

    def events_for_date(self, event_date: date | None) -> dict[int, str]:
        return self.catalog.list_events_on_date(event_date)
