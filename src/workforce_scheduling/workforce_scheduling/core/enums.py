from __future__ import annotations

from enum import Enum


class RuleStatus(str, Enum):
    """Lifecycle of a recurring unavailability rule."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class RuleFrequency(str, Enum):
    WEEKLY = "WEEKLY"


class ExceptionKind(str, Enum):
    """How a date-scoped exception changes the rule-derived windows.

    ADD adds extra unavailability, REMOVE makes the employee available despite
    a rule, REPLACE swaps out the rule windows for that date.
    """

    ADD = "ADD"
    REMOVE = "REMOVE"
    REPLACE = "REPLACE"


class DayOfWeek(int, Enum):
    """ISO weekday numbering (Monday=1 ... Sunday=7)."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7
