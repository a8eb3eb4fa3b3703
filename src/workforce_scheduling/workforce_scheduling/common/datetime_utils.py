from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from ..core.constants import END_OF_DAY
from ..core.exceptions import ValidationError

_HHMM = re.compile(r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 local datetime (no offset conversion is applied)."""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid datetime {value!r}, expected ISO-8601")
    return parsed.replace(tzinfo=None)


def parse_local_time(value: Optional[str]) -> Optional[time]:
    """Parse an HH:mm (24-hour) wall-clock time. Empty values give None."""
    v = (value or "").strip()
    if not v:
        return None
    if not _HHMM.match(v):
        raise ValidationError(f"Invalid time {value!r}, expected HH:mm (24-hour)")
    return datetime.strptime(v, "%H:%M").time()


def format_local_time(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value is not None else None


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, END_OF_DAY)


def at_local_time(day: date, value: time) -> datetime:
    """Wall-clock instant on a date. The timezone label is never applied."""
    return datetime.combine(day, value)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar date in the closed range [start, end]."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def minutes_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 60


def today_local() -> date:
    """Current local date.

    Note: Wrapped so callers can inject it and tests can patch it.
    """
    return date.today()
