from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import FrozenSet, Optional

from ..core.enums import ExceptionKind, RuleFrequency, RuleStatus


@dataclass(frozen=True)
class RecurrenceRule:
    """Domain entity: a weekly-repeating unavailability declaration."""

    rule_id: int
    owner_id: int
    weekdays: FrozenSet[int]
    all_day: bool
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    timezone: str = "UTC"
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    status: RuleStatus = RuleStatus.ACTIVE
    frequency: RuleFrequency = RuleFrequency.WEEKLY
    note: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == RuleStatus.ACTIVE

    def intersects(self, start: date, end: date) -> bool:
        """Effective window intersects [start, end]; open bounds always match."""
        return (self.effective_from or start) <= end and (self.effective_to or end) >= start


@dataclass(frozen=True)
class RuleException:
    """Domain entity: a one-off change to the rule-derived schedule of one date."""

    exception_id: int
    owner_id: int
    date: date
    kind: ExceptionKind
    all_day: bool
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    timezone: str = "UTC"
    note: Optional[str] = None


@dataclass(frozen=True)
class NewRecurrenceRule:
    owner_id: int
    weekdays: FrozenSet[int]
    all_day: bool
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    timezone: str = "UTC"
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    status: RuleStatus = RuleStatus.ACTIVE
    note: Optional[str] = None


@dataclass(frozen=True)
class NewRuleException:
    owner_id: int
    date: date
    kind: ExceptionKind
    all_day: bool
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    timezone: str = "UTC"
    note: Optional[str] = None
