from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import minutes_between
from ..core.exceptions import ValidationError
from ..windows.algebra import overlaps
from ..windows.model import TimeWindow
from .model import Shift
from .repository import ShiftRepository


def validate_bounds(
    start: datetime,
    end: datetime,
    paid_break_minutes: int = 0,
    unpaid_break_minutes: int = 0,
) -> None:
    if start >= end:
        raise ValidationError("start_at must be before end_at")

    if paid_break_minutes < 0 or unpaid_break_minutes < 0:
        raise ValidationError("Break minutes must be greater than or equal to 0")

    duration = minutes_between(start, end)
    total_break = paid_break_minutes + unpaid_break_minutes
    if total_break > duration:
        raise ValidationError(
            f"Total break minutes ({total_break}) cannot exceed shift duration ({duration:g} minutes)"
        )


def find_overlap(
    start: datetime,
    end: datetime,
    existing: Iterable[Shift],
    exclude_shift_id: Optional[int] = None,
) -> Optional[Shift]:
    """First existing shift sharing an instant with [start, end), if any."""
    candidate = TimeWindow(start, end)
    for shift in existing:
        if exclude_shift_id is not None and shift.shift_id == exclude_shift_id:
            continue
        if overlaps(TimeWindow(shift.start_at, shift.end_at), candidate):
            return shift
    return None


class ShiftConflictDetector:
    """Double-booking check against the employee's persisted shifts."""

    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def has_overlap(
        self,
        owner_id: int,
        start: datetime,
        end: datetime,
        exclude_shift_id: Optional[int] = None,
    ) -> Optional[Shift]:
        existing = sorted(self._shifts.list_for_owner(owner_id), key=lambda s: s.start_at)
        return find_overlap(start, end, existing, exclude_shift_id)
