from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional, Tuple


@dataclass(frozen=True)
class AvailabilityWindow:
    """Recurring allowed window on one ISO weekday (Monday=1)."""

    day_of_week: int
    start_time: time
    end_time: time


@dataclass(frozen=True)
class AvailabilityOverride:
    """Date-specific override. Missing times mean unavailable all day."""

    override_date: date
    start_time: Optional[time]
    end_time: Optional[time]
    reason: str

    @property
    def all_day_unavailable(self) -> bool:
        return self.start_time is None or self.end_time is None


@dataclass(frozen=True)
class Availability:
    """Domain entity: an employee's availability definition (allowlist)."""

    availability_id: int
    owner_id: int
    windows: Tuple[AvailabilityWindow, ...] = ()
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    overrides: Tuple[AvailabilityOverride, ...] = ()

    def windows_on(self, day_of_week: int) -> Tuple[AvailabilityWindow, ...]:
        return tuple(w for w in self.windows if w.day_of_week == day_of_week)

    def override_on(self, day: date) -> Optional[AvailabilityOverride]:
        for o in self.overrides:
            if o.override_date == day:
                return o
        return None
