from __future__ import annotations

from datetime import date, datetime

from ..availability.repository import AvailabilityRepository
from ..common.datetime_utils import at_local_time
from ..windows.algebra import contains
from ..windows.model import TimeWindow
from .base import ConstraintChecker, ConstraintResult


class AvailabilityConstraintChecker(ConstraintChecker):
    """Allowlist: the shift must lie entirely inside an availability window.

    Order of evaluation: no definition, effective bounds, date override,
    recurring weekday windows.
    """

    def __init__(self, availability: AvailabilityRepository):
        self._availability = availability

    def check(self, owner_id: int, day: date, start: datetime, end: datetime) -> ConstraintResult:
        availability = self._availability.get_for_owner(owner_id)
        if not availability:
            return ConstraintResult.allow()

        if availability.effective_from and day < availability.effective_from:
            return ConstraintResult.allow("Availability not yet effective")
        if availability.effective_to and day > availability.effective_to:
            return ConstraintResult.allow("Availability has expired")

        shift = TimeWindow(start, end)

        override = availability.override_on(day)
        if override:
            if override.all_day_unavailable:
                return ConstraintResult.block(f"Override: {override.reason}", requires_override=True)
            window = TimeWindow(at_local_time(day, override.start_time), at_local_time(day, override.end_time))
            if contains(window, shift):
                return ConstraintResult.allow()
            return ConstraintResult.block(f"Override: {override.reason}", requires_override=True)

        day_windows = availability.windows_on(day.isoweekday())
        if not day_windows:
            return ConstraintResult.block("No availability defined for this day", requires_override=True)

        for w in day_windows:
            if contains(TimeWindow(at_local_time(day, w.start_time), at_local_time(day, w.end_time)), shift):
                return ConstraintResult.allow()

        return ConstraintResult.block("Shift falls outside defined availability windows", requires_override=True)
