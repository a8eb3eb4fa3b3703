from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..constraints.base import ConstraintResult
    from ..shifts.model import Shift


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRangeError(ValidationError):
    """Raised when a query range is empty or inverted (from > to)."""

    def __init__(self, start, end):
        self.start = start
        self.end = end
        super().__init__(f"Invalid date range: {start} is after {end}")


class ShiftConflictError(DomainError):
    """Raised when a shift overlaps an existing shift of the same employee."""

    def __init__(self, conflicting: "Shift"):
        self.conflicting = conflicting
        super().__init__(
            f"Shift overlaps with existing shift (ID: {conflicting.shift_id}) "
            f"from {conflicting.start_at.isoformat()} to {conflicting.end_at.isoformat()}"
        )


class ConstraintViolationError(DomainError):
    """Raised when a shift is blocked by (un)availability constraints."""

    def __init__(self, result: "ConstraintResult"):
        self.result = result
        super().__init__(result.reason or "Shift is blocked by employee availability")


class RateLimitExceeded(DomainError):
    """Raised when a client exceeds its request budget."""

    def __init__(self, key: str, retry_after: float):
        self.key = key
        self.retry_after = retry_after
        super().__init__("Too many requests. Please try again later.")
