from __future__ import annotations

from datetime import date, datetime, timedelta

from ..common.datetime_utils import end_of_day, start_of_day
from ..unavailability.resolver import ScheduleResolver
from ..windows.algebra import overlaps
from ..windows.model import TimeWindow
from .base import ConstraintChecker, ConstraintResult


class UnavailabilityConstraintChecker(ConstraintChecker):
    """Blocklist: any overlap with a resolved unavailability window blocks."""

    def __init__(self, resolver: ScheduleResolver):
        self._resolver = resolver

    def check(self, owner_id: int, day: date, start: datetime, end: datetime) -> ConstraintResult:
        shift = TimeWindow(start, end)
        # From the date before the shift starts (overnight spill-over) through the
        # date it ends (shifts crossing midnight).
        first = min(day, start.date()) - timedelta(days=1)
        last = max(day, end.date())
        for resolved in self._resolver.resolve(owner_id, first, last):
            for window in resolved.windows:
                if overlaps(window, shift):
                    return ConstraintResult.block(self._reason(window))
        return ConstraintResult.allow()

    @staticmethod
    def _reason(window: TimeWindow) -> str:
        day = window.start.date()
        if window.start == start_of_day(day) and window.end == end_of_day(day):
            return "Full-day unavailability"
        return "Time-based unavailability"
