from __future__ import annotations

from datetime import date
from typing import Sequence

from ..common.datetime_utils import format_local_time
from ..core.enums import ExceptionKind, RuleFrequency, RuleStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    format_weekdays,
    normalize_mysql_date,
    normalize_mysql_time,
    parse_weekdays,
)
from .model import NewRecurrenceRule, NewRuleException, RecurrenceRule, RuleException
from .repository import UnavailabilityRepository


class MySQLUnavailabilityRepository(UnavailabilityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_rules(self, *, owner_id: int, start: date, end: date) -> Sequence[RecurrenceRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT rule_id, employee_id, freq, byweekday, all_day, start_time_local, end_time_local,
                       timezone, effective_from, effective_to, status, note
                FROM employee_unavailability_rules
                WHERE employee_id=%s
                  AND status=%s
                  AND (effective_from IS NULL OR effective_from <= %s)
                  AND (effective_to IS NULL OR effective_to >= %s)
                ORDER BY rule_id
                """,
                (int(owner_id), RuleStatus.ACTIVE.value, end, start),
            )
            return [
                RecurrenceRule(
                    rule_id=int(r["rule_id"]),
                    owner_id=int(r["employee_id"]),
                    weekdays=parse_weekdays(r["byweekday"]),
                    all_day=bool(r["all_day"]),
                    start_time=normalize_mysql_time(r.get("start_time_local")),
                    end_time=normalize_mysql_time(r.get("end_time_local")),
                    timezone=r.get("timezone") or "UTC",
                    effective_from=normalize_mysql_date(r.get("effective_from")),
                    effective_to=normalize_mysql_date(r.get("effective_to")),
                    status=RuleStatus(r["status"]),
                    frequency=RuleFrequency(r.get("freq") or RuleFrequency.WEEKLY.value),
                    note=r.get("note"),
                )
                for r in fetchall(cur)
            ]

    def list_exceptions(self, *, owner_id: int, start: date, end: date) -> Sequence[RuleException]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT exception_id, employee_id, date_local, timezone, type, all_day,
                       start_time_local, end_time_local, note
                FROM employee_unavailability_exceptions
                WHERE employee_id=%s AND date_local BETWEEN %s AND %s
                ORDER BY date_local ASC, exception_id ASC
                """,
                (int(owner_id), start, end),
            )
            return [
                RuleException(
                    exception_id=int(r["exception_id"]),
                    owner_id=int(r["employee_id"]),
                    date=normalize_mysql_date(r["date_local"]),
                    kind=ExceptionKind(r["type"]),
                    all_day=bool(r["all_day"]),
                    start_time=normalize_mysql_time(r.get("start_time_local")),
                    end_time=normalize_mysql_time(r.get("end_time_local")),
                    timezone=r.get("timezone") or "UTC",
                    note=r.get("note"),
                )
                for r in fetchall(cur)
            ]

    def create_rule(self, rule: NewRecurrenceRule) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._insert_rule(cur, rule)

    def create_rules(self, rules: Sequence[NewRecurrenceRule]) -> Sequence[int]:
        # Single transaction; db_cursor rolls back every insert if one fails.
        with db_cursor(self._conn_factory) as (_, cur):
            return [self._insert_rule(cur, rule) for rule in rules]

    @staticmethod
    def _insert_rule(cur, rule: NewRecurrenceRule) -> int:
        cur.execute(
            """
            INSERT INTO employee_unavailability_rules
                (employee_id, freq, byweekday, all_day, start_time_local, end_time_local,
                 timezone, effective_from, effective_to, status, note)
            VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                int(rule.owner_id),
                RuleFrequency.WEEKLY.value,
                format_weekdays(rule.weekdays),
                int(rule.all_day),
                format_local_time(rule.start_time),
                format_local_time(rule.end_time),
                rule.timezone,
                rule.effective_from,
                rule.effective_to,
                RuleStatus(rule.status).value,
                rule.note,
            ),
        )
        return int(cur.lastrowid)

    def create_exception(self, exception: NewRuleException) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_unavailability_exceptions
                    (employee_id, date_local, timezone, type, all_day, start_time_local, end_time_local, note)
                VALUES (%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(exception.owner_id),
                    exception.date,
                    exception.timezone,
                    ExceptionKind(exception.kind).value,
                    int(exception.all_day),
                    format_local_time(exception.start_time),
                    format_local_time(exception.end_time),
                    exception.note,
                ),
            )
            return int(cur.lastrowid)
