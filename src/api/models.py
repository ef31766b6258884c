"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Length, character-class and email-syntax rules are enforced by the domain
layer so that every violation comes back as a field-addressable error.
"""

import datetime

from pydantic import BaseModel, Field


class CategoryOption(BaseModel):
    """An event category currently open for registration."""

    value: str
    label: str


class DateOption(BaseModel):
    """An event date with its display label."""

    date: datetime.date
    label: str


class RegistrationRequest(BaseModel):
    """Request model for event registration."""

    full_name: str
    email: str
    college_name: str
    department: str
    event_id: int
    category: str | None = Field(default=None, description="Category selected in the form")


class RegistrationResponse(BaseModel):
    """Response model for successful registration."""

    id: int
    message: str


class EventCreateRequest(BaseModel):
    """Request model for administrative event creation."""

    name: str
    category: str
    event_date: datetime.date
    registration_start_date: datetime.date
    registration_end_date: datetime.date


class EventCreateResponse(BaseModel):
    """Response model for successful event creation."""

    id: int
    message: str


class EventResponse(BaseModel):
    """An event as shown in the administrative event list."""

    id: int
    name: str
    category: str
    category_label: str
    event_date: datetime.date
    registration_start_date: datetime.date
    registration_end_date: datetime.date


class RegistrationRow(BaseModel):
    """One row of the administrative registration table."""

    name: str
    email: str
    event_date: str
    college_name: str
    department: str
    submission_date: str


class AdminRegistrationsResponse(BaseModel):
    """Registrations for one event with their count."""

    count: int
    rows: list[RegistrationRow]


class ValidationErrorResponse(BaseModel):
    """Field-addressable validation failure."""

    detail: str
    errors: dict[str, str]


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
