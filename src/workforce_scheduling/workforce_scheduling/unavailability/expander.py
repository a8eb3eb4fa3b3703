from __future__ import annotations

from datetime import date, time, timedelta
from typing import Dict, List, Optional

from ..common.datetime_utils import at_local_time, end_of_day, iter_days, start_of_day
from ..common.validators import require_ordered_bounds, require_times_unless_all_day, require_weekdays
from ..windows.model import TimeWindow
from .model import RecurrenceRule


def windows_for(all_day: bool, start_time: Optional[time], end_time: Optional[time], day: date) -> List[TimeWindow]:
    """Concrete windows of a rule or exception on one date.

    An end time at or before the start time means the window crosses midnight;
    it is split at the day boundary. This is the only place windows reach into
    the next date.
    """
    if all_day:
        return [TimeWindow(start_of_day(day), end_of_day(day))]

    require_times_unless_all_day(all_day, start_time, end_time)
    start = at_local_time(day, start_time)
    end = at_local_time(day, end_time)
    if end > start:
        return [TimeWindow(start, end)]

    next_day = day + timedelta(days=1)
    return [
        TimeWindow(start, end_of_day(day)),
        TimeWindow(start_of_day(next_day), at_local_time(next_day, end_time)),
    ]


class RecurrenceExpander:
    """Expands weekly rules into per-date windows over a query range."""

    def expand(self, rule: RecurrenceRule, start: date, end: date) -> Dict[date, List[TimeWindow]]:
        weekdays = require_weekdays(rule.weekdays)
        require_times_unless_all_day(rule.all_day, rule.start_time, rule.end_time)
        require_ordered_bounds(rule.effective_from, rule.effective_to)

        effective_from = rule.effective_from or start
        effective_to = rule.effective_to or end

        occurrences: Dict[date, List[TimeWindow]] = {}
        for day in iter_days(start, end):
            if day.isoweekday() not in weekdays:
                continue
            if day < effective_from or day > effective_to:
                continue
            occurrences[day] = windows_for(rule.all_day, rule.start_time, rule.end_time, day)
        return occurrences
