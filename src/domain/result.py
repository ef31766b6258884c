"""
Result type for domain operations.

Write operations return Ok(value) or Err(error) instead of raising, so that
user-correctable failures reach the caller as structured values.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome."""

    error: E

    @property
    def is_ok(self) -> bool:
        return False


Result = Ok[T] | Err[E]
