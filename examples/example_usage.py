"""Example: resolve a schedule with the service layer only (no Flask, no MySQL).

Controllers stay thin; the resolution engine works on plain records.
"""

from datetime import date, time

from src.workforce_scheduling.workforce_scheduling.core.enums import ExceptionKind
from src.workforce_scheduling.workforce_scheduling.unavailability.model import RecurrenceRule, RuleException
from src.workforce_scheduling.workforce_scheduling.unavailability.resolver import ScheduleResolver


def main():
    rules = [
        RecurrenceRule(
            rule_id=1,
            owner_id=1,
            weekdays=frozenset({1, 3}),
            all_day=False,
            start_time=time(22, 0),
            end_time=time(6, 0),
            timezone="Asia/Ho_Chi_Minh",
            note="Night classes",
        )
    ]
    exceptions = [
        RuleException(
            exception_id=1,
            owner_id=1,
            date=date(2026, 3, 4),
            kind=ExceptionKind.REMOVE,
            all_day=True,
        )
    ]

    for day in ScheduleResolver().resolve_records(rules, exceptions, date(2026, 3, 2), date(2026, 3, 8)):
        windows = ", ".join(f"{w.start:%a %H:%M}-{w.end:%a %H:%M}" for w in day.windows) or "free"
        print(day.date, windows)


if __name__ == "__main__":
    main()
