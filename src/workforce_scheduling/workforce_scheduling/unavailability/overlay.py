from __future__ import annotations

from datetime import date
from typing import Iterable, List

from ..core.constants import EXCEPTION_PRIORITY
from ..core.enums import ExceptionKind
from ..windows.algebra import merge, subtract
from ..windows.model import TimeWindow
from .expander import windows_for
from .model import RuleException


def priority(exception: RuleException) -> int:
    return EXCEPTION_PRIORITY[ExceptionKind(exception.kind).value]


class ExceptionOverlay:
    """Applies date-scoped exceptions on top of rule-derived windows.

    Exceptions of one date always run REPLACE, then REMOVE, then ADD, whatever
    order they were stored in.
    """

    def apply(self, windows: Iterable[TimeWindow], exceptions: Iterable[RuleException], day: date) -> List[TimeWindow]:
        working = list(windows)
        for exception in sorted(exceptions, key=priority):
            working = self._apply_one(working, exception, day)
        return merge(working)

    def _apply_one(self, working: List[TimeWindow], exception: RuleException, day: date) -> List[TimeWindow]:
        exception_windows = windows_for(exception.all_day, exception.start_time, exception.end_time, day)
        kind = ExceptionKind(exception.kind)

        if kind == ExceptionKind.REPLACE:
            return exception_windows
        if kind == ExceptionKind.REMOVE:
            return subtract(working, exception_windows)
        return merge([*working, *exception_windows])
