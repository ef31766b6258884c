"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory repository fakes implementing the domain ports
- Event factories
- Wired domain services
"""

from collections.abc import Iterator
from datetime import date, datetime
from itertools import count

import pytest

from src.domain.admin import AdminQueryService
from src.domain.availability import AvailabilityResolver
from src.domain.catalog import EventCatalog
from src.domain.exceptions import DuplicateRegistration
from src.domain.models import (
    Event,
    NewEvent,
    NewRegistration,
    RegistrationDetail,
    RegistrationNotification,
    parse_category,
)
from src.domain.registration import RegistrationService


class InMemoryEventRepository:
    """EventRepository fake backed by a dict."""

    def __init__(self) -> None:
        self.events: dict[int, Event] = {}
        self._ids = count(1)
        self.registered_dates: set[date] = set()

    def add_event(self, event: NewEvent) -> int:
        event_id = next(self._ids)
        self.events[event_id] = Event(
            id=event_id,
            name=event.name,
            category=parse_category(event.category),
            event_date=event.event_date,
            registration_start=event.registration_start,
            registration_end=event.registration_end,
            created_at=datetime(2024, 1, 1, 12, 0, 0),
        )
        return event_id

    def get_event(self, event_id: int) -> Event | None:
        return self.events.get(event_id)

    def list_events(self) -> list[Event]:
        return sorted(self.events.values(), key=lambda e: (e.event_date, e.id))

    def list_event_dates(self, descending: bool = True) -> list[date]:
        return sorted({e.event_date for e in self.events.values()}, reverse=descending)

    def list_events_on_date(self, event_date: date) -> list[tuple[int, str]]:
        matches = [e for e in self.events.values() if e.event_date == event_date]
        return [(e.id, e.name) for e in sorted(matches, key=lambda e: e.name)]

    def list_event_dates_with_registrations(self) -> list[date]:
        return sorted(self.registered_dates, reverse=True)


class InMemoryRegistrationRepository:
    """RegistrationRepository fake that enforces the (email, event_date) constraint."""

    def __init__(self, events: InMemoryEventRepository) -> None:
        self._events = events
        self.rows: list[RegistrationDetail] = []
        self._ids = count(1)

    def add_registration(self, registration: NewRegistration) -> int:
        if any(
            r.email == registration.email and r.event_date == registration.event_date
            for r in self.rows
        ):
            raise DuplicateRegistration(registration.email, registration.event_date)
        event = self._events.get_event(registration.event_id)
        registration_id = next(self._ids)
        self.rows.append(
            RegistrationDetail(
                id=registration_id,
                full_name=registration.full_name,
                email=registration.email,
                college_name=registration.college_name,
                department=registration.department,
                category=registration.category,
                event_id=registration.event_id,
                created_at=registration.created_at,
                event_name=event.name,
                event_date=event.event_date,
            )
        )
        self._events.registered_dates.add(event.event_date)
        return registration_id

    def has_registration(self, email: str, event_date: date) -> bool:
        return any(r.email == email and r.event_date == event_date for r in self.rows)

    def list_registrations(self, event_id: int | None = None) -> list[RegistrationDetail]:
        rows = [r for r in self.rows if event_id is None or r.event_id == event_id]
        return sorted(rows, key=lambda r: (r.created_at, r.id), reverse=True)

    def iter_registrations(self, event_id: int | None = None) -> Iterator[RegistrationDetail]:
        yield from self.list_registrations(event_id)

    def count_registrations(self, event_id: int) -> int:
        return sum(1 for r in self.rows if r.event_id == event_id)


class RecordingDispatcher:
    """NotificationDispatcher fake that records every notification."""

    def __init__(self) -> None:
        self.sent: list[RegistrationNotification] = []

    def send_registration_confirmation(self, notification: RegistrationNotification) -> None:
        self.sent.append(notification)


class FixedClock:
    """Callable clock returning a settable instant."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def event_repository() -> InMemoryEventRepository:
    return InMemoryEventRepository()


@pytest.fixture
def registration_repository(
    event_repository: InMemoryEventRepository,
) -> InMemoryRegistrationRepository:
    return InMemoryRegistrationRepository(event_repository)


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 6, 15, 9, 30, 0))


@pytest.fixture
def catalog(event_repository: InMemoryEventRepository) -> EventCatalog:
    return EventCatalog(repository=event_repository)


@pytest.fixture
def resolver(catalog: EventCatalog) -> AvailabilityResolver:
    return AvailabilityResolver(catalog=catalog, today=lambda: date(2024, 6, 15))


@pytest.fixture
def registration_service(
    catalog: EventCatalog,
    registration_repository: InMemoryRegistrationRepository,
    dispatcher: RecordingDispatcher,
    clock: FixedClock,
) -> RegistrationService:
    return RegistrationService(
        catalog=catalog,
        repository=registration_repository,
        dispatcher=dispatcher,
        clock=clock,
    )


@pytest.fixture
def admin_service(
    catalog: EventCatalog, registration_repository: InMemoryRegistrationRepository
) -> AdminQueryService:
    return AdminQueryService(catalog=catalog, repository=registration_repository)


def make_event(
    repository: InMemoryEventRepository,
    name: str = "Build Weekend",
    category: str = "hackathon",
    event_date: date = date(2024, 7, 10),
    registration_start: date = date(2024, 6, 1),
    registration_end: date = date(2024, 7, 5),
) -> int:
    """Add an event to the in-memory repository and return its id."""
    return repository.add_event(
        NewEvent(
            name=name,
            category=category,
            event_date=event_date,
            registration_start=registration_start,
            registration_end=registration_end,
        )
    )


@pytest.fixture
def add_event(event_repository: InMemoryEventRepository):
    """Factory fixture: add_event(**overrides) -> event id."""

    def _add(**overrides) -> int:
        return make_event(event_repository, **overrides)

    return _add
