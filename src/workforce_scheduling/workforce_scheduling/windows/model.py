from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Tuple


@dataclass(frozen=True)
class TimeWindow:
    """Half-open interval [start, end) of local wall-clock instants."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class ResolvedDay:
    """Read-model: merged windows for one calendar date (query-time projection)."""

    date: date
    windows: Tuple[TimeWindow, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.windows
