"""
Domain exceptions - Semantic error types for event registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""

from datetime import date


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class InvalidField(RegistrationError):
    """A single field failed validation."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class InvalidEmail(InvalidField):
    """Email address is not syntactically valid."""

    def __init__(self, message: str = "Please enter a valid email address.") -> None:
        super().__init__("email", message)


class ValidationFailed(RegistrationError):
    """One or more fields failed validation; all violations are carried."""

    def __init__(self, errors: list[InvalidField]) -> None:
        super().__init__(", ".join(str(error) for error in errors))
        self.errors = errors

    @property
    def fields(self) -> dict[str, str]:
        """Field name -> message (first message wins per field)."""
        result: dict[str, str] = {}
        for error in self.errors:
            result.setdefault(error.field, error.message)
        return result


class DuplicateRegistration(RegistrationError):
    """Email already registered for an event on the same date."""

    def __init__(self, email: str, event_date: date | None = None) -> None:
        super().__init__(email)
        self.email = email
        self.event_date = event_date


class EventUnavailable(RegistrationError):
    """Event does not exist or is outside its registration window."""

    def __init__(self, event_id: int) -> None:
        super().__init__(f"Event {event_id} is not available")
        self.event_id = event_id


class StorageFailure(RegistrationError):
    """Unexpected fault from the storage layer."""

    pass


class NotificationFailure(RegistrationError):
    """Confirmation or admin notification could not be delivered."""

    pass
