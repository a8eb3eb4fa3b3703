from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional

from ..core.exceptions import InvalidRangeError
from ..windows.model import ResolvedDay, TimeWindow
from .expander import RecurrenceExpander
from .model import RecurrenceRule, RuleException
from .overlay import ExceptionOverlay
from .repository import UnavailabilityRepository

logger = logging.getLogger(__name__)


class ScheduleResolver:
    """Folds an employee's rules and exceptions into per-date windows.

    Dates missing from the result carry no constraint windows at all. A date
    that only has exceptions is still returned, possibly with no windows, so
    "cleared by an exception" stays distinguishable from "no data".
    """

    def __init__(
        self,
        rules: Optional[UnavailabilityRepository] = None,
        *,
        expander: Optional[RecurrenceExpander] = None,
        overlay: Optional[ExceptionOverlay] = None,
    ):
        self._rules = rules
        self._expander = expander or RecurrenceExpander()
        self._overlay = overlay or ExceptionOverlay()

    def resolve(self, owner_id: int, start: date, end: date) -> List[ResolvedDay]:
        if start > end:
            raise InvalidRangeError(start, end)
        if self._rules is None:
            raise RuntimeError("ScheduleResolver has no rule repository; use resolve_records()")

        rules = self._rules.list_rules(owner_id=owner_id, start=start, end=end)
        exceptions = self._rules.list_exceptions(owner_id=owner_id, start=start, end=end)
        logger.debug(
            "resolving owner=%s %s..%s (%d rules, %d exceptions)", owner_id, start, end, len(rules), len(exceptions)
        )
        return self.resolve_records(rules, exceptions, start, end)

    def resolve_records(
        self,
        rules: Iterable[RecurrenceRule],
        exceptions: Iterable[RuleException],
        start: date,
        end: date,
    ) -> List[ResolvedDay]:
        if start > end:
            raise InvalidRangeError(start, end)

        windows_by_date: Dict[date, List[TimeWindow]] = {}
        for rule in rules:
            if not rule.is_active or not rule.intersects(start, end):
                continue
            for day, windows in self._expander.expand(rule, start, end).items():
                windows_by_date.setdefault(day, []).extend(windows)

        exceptions_by_date: Dict[date, List[RuleException]] = {}
        for exception in exceptions:
            if start <= exception.date <= end:
                exceptions_by_date.setdefault(exception.date, []).append(exception)

        out: List[ResolvedDay] = []
        for day in sorted(set(windows_by_date) | set(exceptions_by_date)):
            day_exceptions = exceptions_by_date.get(day, [])
            windows = self._overlay.apply(windows_by_date.get(day, []), day_exceptions, day)
            if windows or day_exceptions:
                out.append(ResolvedDay(date=day, windows=tuple(windows)))
        return out
