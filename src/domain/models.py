"""
Domain models - Events, registrations and the category vocabulary.

Events and registrations are independent aggregates. A registration refers
to its event by id only; the event is the canonical owner of the event date
and category.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum


class Category(str, Enum):
    """
    Fixed event categories.

    The str mixin keeps values directly comparable with the raw strings
    stored in the events table.
    """

    ONLINE_WORKSHOP = "online_workshop"
    HACKATHON = "hackathon"
    CONFERENCE = "conference"
    ONE_DAY_WORKSHOP = "one_day_workshop"

    @property
    def label(self) -> str:
        """Human-readable label."""
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    Category.ONLINE_WORKSHOP: "Online Workshop",
    Category.HACKATHON: "Hackathon",
    Category.CONFERENCE: "Conference",
    Category.ONE_DAY_WORKSHOP: "One-day Workshop",
}


@dataclass(frozen=True)
class OtherCategory:
    """A stored category value outside the fixed set (legacy data)."""

    value: str

    @property
    def label(self) -> str:
        return self.value


EventCategory = Category | OtherCategory


def parse_category(raw: str) -> EventCategory:
    """Map a stored category string onto Category, degrading to OtherCategory."""
    try:
        return Category(raw)
    except ValueError:
        return OtherCategory(raw)


def category_label(raw: str) -> str:
    """Display label for a raw category value (raw value if unknown)."""
    return parse_category(raw).label


@dataclass(frozen=True)
class NewEvent:
    """Event data as submitted by an administrator."""

    name: str
    category: str
    event_date: date
    registration_start: date
    registration_end: date


@dataclass(frozen=True)
class Event:
    """
    A scheduled event with its registration window.

    Invariant (checked at creation only):
        registration_start <= registration_end <= event_date
    """

    id: int
    name: str
    category: EventCategory
    event_date: date
    registration_start: date
    registration_end: date
    created_at: datetime

    def is_open_on(self, today: date) -> bool:
        """True if the registration window contains today (both ends inclusive)."""
        return self.registration_start <= today <= self.registration_end


@dataclass(frozen=True)
class RegistrationSubmission:
    """Raw registration form input."""

    full_name: str
    email: str
    college_name: str
    department: str
    event_id: int
    category: str | None = None


@dataclass(frozen=True)
class NewRegistration:
    """A validated registration ready to be persisted."""

    full_name: str
    email: str
    college_name: str
    department: str
    category: str
    event_id: int
    event_date: date
    created_at: datetime


@dataclass(frozen=True)
class RegistrationDetail:
    """A stored registration joined with its event's name and date."""

    id: int
    full_name: str
    email: str
    college_name: str
    department: str
    category: str
    event_id: int
    created_at: datetime
    event_name: str
    event_date: date


@dataclass(frozen=True)
class RegistrationNotification:
    """Payload handed to the notification dispatcher after a registration."""

    full_name: str
    email: str
    college_name: str
    department: str
    event_name: str
    event_date: date
    category: str
