"""
Registration domain service - validated, duplicate-checked registration writes.

Registration flow
=================

1. Resolve the event; it must exist and its window must contain today.
2. Validate the text fields and the email syntax, collecting every violation.
3. Check for an existing registration with the same email on the same
   event date (DuplicateGuard).
4. Persist the registration.
5. Dispatch notifications. Delivery failures are logged only; the
   registration is durable once step 4 succeeds.

Steps 3 and 4 are check-then-act: two concurrent submissions can both pass
the check. The repository port requires the storage layer to reject the
second insert on its (email, event_date) uniqueness constraint, and that
rejection is reported exactly like a failed check (DuplicateRegistration).
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime

from .catalog import EventCatalog
from .exceptions import (
    DuplicateRegistration,
    EventUnavailable,
    InvalidEmail,
    InvalidField,
    RegistrationError,
    StorageFailure,
    ValidationFailed,
)
from .models import Event, NewRegistration, RegistrationNotification, RegistrationSubmission
from .ports import NotificationDispatcher, RegistrationRepository
from .result import Err, Ok, Result
from .validation import (
    is_valid_email,
    is_valid_text_field,
    is_within_length,
    too_long_message,
)

logger = logging.getLogger(__name__)

_TEXT_FIELDS = {
    "full_name": "Full name",
    "college_name": "College name",
    "department": "Department",
}


@dataclass
class DuplicateGuard:
    """Detects an existing registration for (email, event date)."""

    repository: RegistrationRepository

    def is_duplicate(self, email: str, event_date: date) -> bool:
        """
        True if the email already has a registration on an event on this date.

        Raises:
            StorageFailure: Propagated; the caller is on the write path
        """
        return self.repository.has_registration(email, event_date)


@dataclass
class RegistrationService:
    """
    Domain service for event registration.

    Orchestrates the registration flow: event resolution, field validation,
    duplicate detection, persistence and notification.
    """

    catalog: EventCatalog
    repository: RegistrationRepository
    dispatcher: NotificationDispatcher
    clock: Callable[[], datetime] = field(default=datetime.now)

    def register(
        self, submission: RegistrationSubmission, today: date | None = None
    ) -> Result[int, RegistrationError]:
        """
        Register a submission for its chosen event.

        Args:
            submission: Raw form input
            today: Reference date for the registration window (defaults to
                the clock's current date)

        Returns:
            Ok(registration_id) on success, otherwise Err with one of
            EventUnavailable, ValidationFailed, DuplicateRegistration or
            StorageFailure
        """
        now = self.clock()
        reference = today or now.date()

        try:
            event = self.catalog.resolve(submission.event_id)
        except StorageFailure as e:
            logger.error("Error resolving event %s: %s", submission.event_id, e)
            return Err(e)
        if event is None or not event.is_open_on(reference):
            return Err(EventUnavailable(submission.event_id))

        errors = self._validate(submission)
        if errors:
            return Err(ValidationFailed(errors))

        guard = DuplicateGuard(self.repository)
        try:
            if guard.is_duplicate(submission.email, event.event_date):
                return Err(DuplicateRegistration(submission.email, event.event_date))

            registration_id = self.repository.add_registration(
                NewRegistration(
                    full_name=submission.full_name,
                    email=submission.email,
                    college_name=submission.college_name,
                    department=submission.department,
                    category=event.category.value,
                    event_id=event.id,
                    event_date=event.event_date,
                    created_at=now,
                )
            )
        except DuplicateRegistration as e:
            logger.warning(
                "Concurrent duplicate registration rejected by storage: event_id=%s", event.id
            )
            return Err(e)
        except StorageFailure as e:
            logger.error("Error saving registration for event %s: %s", event.id, e)
            return Err(e)

        logger.info("Registration %s created for event %s", registration_id, event.id)
        self._notify(submission, event)
        return Ok(registration_id)

    def _validate(self, submission: RegistrationSubmission) -> list[InvalidField]:
        errors: list[InvalidField] = []
        for name, label in _TEXT_FIELDS.items():
            value = getattr(submission, name)
            if not is_within_length(value):
                errors.append(InvalidField(name, too_long_message(label)))
            elif not is_valid_text_field(value):
                errors.append(
                    InvalidField(
                        name,
                        f"{label} contains invalid characters. Only letters, numbers, "
                        "spaces, hyphens, and periods are allowed.",
                    )
                )
        if not is_within_length(submission.email):
            errors.append(InvalidEmail(too_long_message("Email address")))
        elif not is_valid_email(submission.email):
            errors.append(InvalidEmail())
        return errors

    def _notify(self, submission: RegistrationSubmission, event: Event) -> None:
        notification = RegistrationNotification(
            full_name=submission.full_name,
            email=submission.email,
            college_name=submission.college_name,
            department=submission.department,
            event_name=event.name,
            event_date=event.event_date,
            category=event.category.label,
        )
        try:
            self.dispatcher.send_registration_confirmation(notification)
        except Exception:
            logger.exception("Notification failed for registration by %s", submission.email)
