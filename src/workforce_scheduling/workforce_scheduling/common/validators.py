from __future__ import annotations

from datetime import date, time
from typing import Iterable, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_times_unless_all_day(all_day: bool, start_time: Optional[time], end_time: Optional[time]) -> None:
    if not all_day and (start_time is None or end_time is None):
        raise ValidationError("start and end time are required unless the entry is all day")


def require_weekdays(weekdays: Iterable[int]) -> frozenset[int]:
    if isinstance(weekdays, (str, bytes)):
        raise ValidationError("Weekdays must be a list of numbers")
    try:
        days = frozenset(int(d) for d in weekdays)
    except (TypeError, ValueError):
        raise ValidationError(f"Weekdays must be a list of numbers, got {weekdays!r}")
    if not days:
        raise ValidationError("At least one weekday is required")
    invalid = sorted(d for d in days if d < 1 or d > 7)
    if invalid:
        raise ValidationError(f"Weekdays must be between 1 (Monday) and 7 (Sunday), got {invalid}")
    return days


def require_ordered_bounds(effective_from: Optional[date], effective_to: Optional[date]) -> None:
    if effective_from and effective_to and effective_from > effective_to:
        raise ValidationError("effective_from must be before or equal to effective_to")


def require_start_before_end(start: Optional[time], end: Optional[time], *, label: str = "") -> None:
    if start is not None and end is not None and start >= end:
        prefix = f"For {label}, " if label else ""
        raise ValidationError(f"{prefix}start time must be before end time")


def require_bool(value: object, field_name: str, *, default: bool = False) -> bool:
    """Accept a real JSON boolean only; a missing value gives `default`."""
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValidationError(f"{field_name} must be true or false")
    return value
