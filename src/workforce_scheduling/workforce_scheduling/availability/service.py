from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional

from ..common.datetime_utils import parse_local_time, today_local
from ..common.validators import require_non_empty, require_ordered_bounds, require_start_before_end
from ..core.enums import DayOfWeek
from ..core.exceptions import ValidationError
from .model import AvailabilityOverride, AvailabilityWindow
from .repository import AvailabilityRepository

logger = logging.getLogger(__name__)


class AvailabilityService:
    def __init__(self, availability: AvailabilityRepository):
        self._availability = availability

    @staticmethod
    def _parse_window(raw: Mapping[str, object]) -> AvailabilityWindow:
        try:
            day = DayOfWeek(int(raw["day_of_week"]))
        except (KeyError, TypeError, ValueError):
            raise ValidationError(f"Invalid day_of_week in {dict(raw)!r}")

        start = parse_local_time(str(raw.get("start_time") or ""))
        end = parse_local_time(str(raw.get("end_time") or ""))
        if start is None or end is None:
            raise ValidationError(f"For {day.name}, start_time and end_time are required")
        return AvailabilityWindow(day_of_week=day.value, start_time=start, end_time=end)

    @staticmethod
    def validate_windows(windows: Iterable[AvailabilityWindow]) -> None:
        by_day: Dict[int, List[AvailabilityWindow]] = defaultdict(list)
        for w in windows:
            by_day[w.day_of_week].append(w)

        for day, day_windows in by_day.items():
            label = DayOfWeek(day).name
            for w in day_windows:
                require_start_before_end(w.start_time, w.end_time, label=label)

            day_windows.sort(key=lambda w: w.start_time)
            for prev, cur in zip(day_windows, day_windows[1:]):
                if cur.start_time < prev.end_time:
                    raise ValidationError(
                        f"Overlapping time windows for {label}: "
                        f"{prev.start_time:%H:%M}-{prev.end_time:%H:%M} overlaps with "
                        f"{cur.start_time:%H:%M}-{cur.end_time:%H:%M}"
                    )

    def define(
        self,
        *,
        owner_id: int,
        windows: Iterable[Mapping[str, object]],
        effective_from: Optional[date] = None,
        effective_to: Optional[date] = None,
    ) -> int:
        if int(owner_id) <= 0:
            raise ValidationError("Invalid employee")

        parsed = [self._parse_window(w) for w in windows]
        self.validate_windows(parsed)
        require_ordered_bounds(effective_from, effective_to)

        availability_id = self._availability.upsert(
            owner_id=int(owner_id),
            windows=parsed,
            effective_from=effective_from,
            effective_to=effective_to,
        )
        logger.info("availability %s defined for employee %s (%d windows)", availability_id, owner_id, len(parsed))
        return availability_id

    def add_override(
        self,
        *,
        owner_id: int,
        override_date: date,
        start_time: Optional[str],
        end_time: Optional[str],
        reason: str,
        today: Optional[date] = None,
    ) -> int:
        today = today or today_local()

        availability = self._availability.get_for_owner(int(owner_id))
        if not availability:
            raise ValidationError("Availability not found")

        if override_date < today:
            raise ValidationError("Overrides can only be created for future dates")

        start = parse_local_time(start_time)
        end = parse_local_time(end_time)
        require_start_before_end(start, end)

        if availability.override_on(override_date):
            raise ValidationError("An override already exists for this date. Update the existing override instead.")

        override = AvailabilityOverride(
            override_date=override_date,
            start_time=start if end else None,
            end_time=end if start else None,
            reason=require_non_empty(reason, "Reason"),
        )
        return self._availability.create_override(availability_id=availability.availability_id, override=override)

    def upcoming_overrides(self, owner_id: int, *, today: Optional[date] = None) -> List[AvailabilityOverride]:
        today = today or today_local()
        availability = self._availability.get_for_owner(int(owner_id))
        if not availability:
            return []
        return sorted(
            (o for o in availability.overrides if o.override_date >= today),
            key=lambda o: o.override_date,
        )
