from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import NewShift, Shift
from .repository import ShiftRepository


def _to_shift(r: Dict[str, Any]) -> Shift:
    return Shift(
        shift_id=int(r["shift_id"]),
        owner_id=int(r["employee_id"]),
        start_at=r["start_at"],
        end_at=r["end_at"],
        paid_break_minutes=int(r.get("paid_break_minutes") or 0),
        unpaid_break_minutes=int(r.get("unpaid_break_minutes") or 0),
        note=r.get("note"),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_owner(self, owner_id: int) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, employee_id, start_at, end_at, paid_break_minutes, unpaid_break_minutes, note
                FROM shifts
                WHERE employee_id=%s
                ORDER BY start_at
                """,
                (int(owner_id),),
            )
            return [_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, employee_id, start_at, end_at, paid_break_minutes, unpaid_break_minutes, note
                FROM shifts
                WHERE shift_id=%s
                """,
                (int(shift_id),),
            )
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def create(self, shift: NewShift) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(employee_id, start_at, end_at, paid_break_minutes, unpaid_break_minutes, note)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(shift.owner_id),
                    shift.start_at,
                    shift.end_at,
                    int(shift.paid_break_minutes),
                    int(shift.unpaid_break_minutes),
                    shift.note,
                ),
            )
            return int(cur.lastrowid)

    def update(self, shift_id: int, shift: NewShift) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET start_at=%s, end_at=%s, paid_break_minutes=%s, unpaid_break_minutes=%s, note=%s
                WHERE shift_id=%s AND employee_id=%s
                """,
                (
                    shift.start_at,
                    shift.end_at,
                    int(shift.paid_break_minutes),
                    int(shift.unpaid_break_minutes),
                    shift.note,
                    int(shift_id),
                    int(shift.owner_id),
                ),
            )
            return cur.rowcount > 0
