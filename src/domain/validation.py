"""
Field validation rules for registration and event forms.

Text fields accept Unicode letters, digits, whitespace, hyphens and periods.
Event names accept Unicode letters, digits, whitespace, hyphens and
underscores. Every free-text field is limited to MAX_FIELD_LENGTH characters.
Email syntax is checked with email-validator without any DNS lookups; the
address itself is never normalized.
"""

import re

from email_validator import EmailNotValidError, validate_email

# [^\W_] is any Unicode letter or digit
_TEXT_FIELD_PATTERN = re.compile(r"(?:[^\W_]|[\s.\-])+")
_EVENT_NAME_PATTERN = re.compile(r"[\w\s\-]+")

# Width of the free-text columns in the events and registrations tables
MAX_FIELD_LENGTH = 255


def is_within_length(value: str) -> bool:
    return len(value) <= MAX_FIELD_LENGTH


def too_long_message(label: str) -> str:
    return f"{label} cannot be longer than {MAX_FIELD_LENGTH} characters."


def is_valid_text_field(value: str) -> bool:
    """Check a registrant text field (name, college, department)."""
    return bool(value) and _TEXT_FIELD_PATTERN.fullmatch(value) is not None


def is_valid_event_name(value: str) -> bool:
    """Check an administrator-supplied event name."""
    return bool(value) and _EVENT_NAME_PATTERN.fullmatch(value) is not None


def is_valid_email(value: str) -> bool:
    """Check email syntax only (no deliverability check)."""
    if not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
