from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time

import pytest

from src.workforce_scheduling.workforce_scheduling.core.enums import ExceptionKind, RuleStatus
from src.workforce_scheduling.workforce_scheduling.core.exceptions import InvalidRangeError, ValidationError
from src.workforce_scheduling.workforce_scheduling.unavailability.model import RecurrenceRule, RuleException
from src.workforce_scheduling.workforce_scheduling.unavailability.resolver import ScheduleResolver
from src.workforce_scheduling.workforce_scheduling.windows.model import ResolvedDay, TimeWindow

MONDAY = date(2026, 3, 2)
TUESDAY = date(2026, 3, 3)


@dataclass
class InMemoryUnavailability:
    rules: list[RecurrenceRule] = field(default_factory=list)
    exceptions: list[RuleException] = field(default_factory=list)

    def list_rules(self, *, owner_id: int, start: date, end: date):
        return [r for r in self.rules if r.owner_id == owner_id]

    def list_exceptions(self, *, owner_id: int, start: date, end: date):
        return [e for e in self.exceptions if e.owner_id == owner_id]


def office_hours(**overrides) -> RecurrenceRule:
    fields = dict(
        rule_id=1,
        owner_id=7,
        weekdays=frozenset({1, 2, 3, 4, 5}),
        all_day=False,
        start_time=time(9, 0),
        end_time=time(17, 0),
        timezone="Asia/Ho_Chi_Minh",
    )
    fields.update(overrides)
    return RecurrenceRule(**fields)


def exception(day: date, kind: ExceptionKind, start=None, end=None, *, all_day: bool = False) -> RuleException:
    return RuleException(
        exception_id=1, owner_id=7, date=day, kind=kind, all_day=all_day, start_time=start, end_time=end
    )


def at(day: date, hh: int, mm: int = 0) -> datetime:
    return datetime.combine(day, time(hh, mm))


def test_rules_are_expanded_per_date_in_order():
    repo = InMemoryUnavailability(rules=[office_hours()])

    days = ScheduleResolver(repo).resolve(7, MONDAY, date(2026, 3, 8))

    assert [d.date for d in days] == [date(2026, 3, d) for d in range(2, 7)]
    assert days[0].windows == (TimeWindow(at(MONDAY, 9), at(MONDAY, 17)),)


def test_two_rules_on_the_same_date_are_merged():
    repo = InMemoryUnavailability(
        rules=[
            office_hours(),
            office_hours(rule_id=2, weekdays=frozenset({1}), start_time=time(16, 0), end_time=time(20, 0)),
        ]
    )

    days = ScheduleResolver(repo).resolve(7, MONDAY, MONDAY)

    assert days == [ResolvedDay(date=MONDAY, windows=(TimeWindow(at(MONDAY, 9), at(MONDAY, 20)),))]


def test_inactive_and_out_of_range_rules_are_ignored():
    repo = InMemoryUnavailability(
        rules=[
            office_hours(status=RuleStatus.INACTIVE),
            office_hours(rule_id=2, effective_from=date(2026, 4, 1)),
            office_hours(rule_id=3, effective_to=date(2026, 2, 28)),
        ]
    )

    assert ScheduleResolver(repo).resolve(7, MONDAY, date(2026, 3, 8)) == []


def test_remove_exception_splits_day():
    repo = InMemoryUnavailability(
        rules=[office_hours()],
        exceptions=[exception(MONDAY, ExceptionKind.REMOVE, time(12, 0), time(13, 0))],
    )

    days = ScheduleResolver(repo).resolve(7, MONDAY, MONDAY)

    assert days[0].windows == (
        TimeWindow(at(MONDAY, 9), at(MONDAY, 12)),
        TimeWindow(at(MONDAY, 13), at(MONDAY, 17)),
    )


def test_date_cleared_by_exception_is_still_reported():
    repo = InMemoryUnavailability(
        rules=[office_hours()],
        exceptions=[exception(MONDAY, ExceptionKind.REMOVE, all_day=True)],
    )

    days = ScheduleResolver(repo).resolve(7, MONDAY, TUESDAY)

    assert days[0] == ResolvedDay(date=MONDAY, windows=())
    assert days[0].is_empty
    assert days[1].date == TUESDAY


def test_add_exception_on_a_date_without_rules():
    saturday = date(2026, 3, 7)
    repo = InMemoryUnavailability(
        rules=[office_hours()],
        exceptions=[exception(saturday, ExceptionKind.ADD, time(8, 0), time(9, 0))],
    )

    days = ScheduleResolver(repo).resolve(7, saturday, saturday)

    assert days == [ResolvedDay(date=saturday, windows=(TimeWindow(at(saturday, 8), at(saturday, 9)),))]


def test_exceptions_outside_range_are_ignored():
    resolver = ScheduleResolver()
    days = resolver.resolve_records(
        [], [exception(date(2026, 3, 20), ExceptionKind.ADD, time(8, 0), time(9, 0))], MONDAY, TUESDAY
    )

    assert days == []


def test_overnight_rule_keeps_spill_over_under_its_own_date():
    repo = InMemoryUnavailability(
        rules=[office_hours(weekdays=frozenset({1}), start_time=time(22, 0), end_time=time(6, 0))]
    )

    days = ScheduleResolver(repo).resolve(7, MONDAY, TUESDAY)

    assert [d.date for d in days] == [MONDAY]
    assert days[0].windows[-1] == TimeWindow(at(TUESDAY, 0), at(TUESDAY, 6))


def test_inverted_range_is_rejected():
    with pytest.raises(InvalidRangeError):
        ScheduleResolver(InMemoryUnavailability()).resolve(7, TUESDAY, MONDAY)

    assert issubclass(InvalidRangeError, ValidationError)


def test_no_data_is_an_empty_result():
    assert ScheduleResolver(InMemoryUnavailability()).resolve(7, MONDAY, TUESDAY) == []
