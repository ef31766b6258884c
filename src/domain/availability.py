"""
Availability resolver - the category -> date -> event cascade.

Availability is a pure function of each event's registration window and the
reference date. Nothing is stored about it: an event drops out of every
result the day after its registration_end and appears on its
registration_start, with no state transition in between.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date

from .catalog import EventCatalog
from .models import Event, EventCategory, parse_category


def date_label(value: date) -> str:
    """Display label such as 'July 10, 2024'."""
    return f"{value:%B} {value.day}, {value.year}"


@dataclass
class AvailabilityResolver:
    """Derives what a registrant can currently choose from."""

    catalog: EventCatalog
    today: Callable[[], date] = field(default=date.today)

    def available_categories(self, today: date | None = None) -> set[EventCategory]:
        """Categories with at least one event open for registration today."""
        return {event.category for event in self._open_events(today)}

    def available_dates(self, category: str | None, today: date | None = None) -> list[date]:
        """Distinct event dates, ascending, for open events of a category."""
        if not category:
            return []
        wanted = parse_category(category)
        dates = {event.event_date for event in self._open_events(today) if event.category == wanted}
        return sorted(dates)

    def available_event_names(
        self, category: str | None, event_date: date | None, today: date | None = None
    ) -> dict[int, str]:
        """Event id -> name for open events matching category and date exactly."""
        if not category or not event_date:
            return {}
        wanted = parse_category(category)
        matches = [
            event
            for event in self._open_events(today)
            if event.category == wanted and event.event_date == event_date
        ]
        matches.sort(key=lambda event: event.name)
        return {event.id: event.name for event in matches}

    def _open_events(self, today: date | None) -> list[Event]:
        reference = today or self.today()
        return [event for event in self.catalog.list_all() if event.is_open_on(reference)]
