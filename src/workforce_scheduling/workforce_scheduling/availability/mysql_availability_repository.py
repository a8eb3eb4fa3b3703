from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import format_local_time
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_date, normalize_mysql_time
from .model import Availability, AvailabilityOverride, AvailabilityWindow
from .repository import AvailabilityRepository


class MySQLAvailabilityRepository(AvailabilityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_owner(self, owner_id: int) -> Optional[Availability]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT availability_id, employee_id, effective_from, effective_to
                FROM employee_availability
                WHERE employee_id=%s
                """,
                (int(owner_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            availability_id = int(r["availability_id"])

            cur.execute(
                """
                SELECT day_of_week, start_time, end_time
                FROM employee_availability_windows
                WHERE availability_id=%s
                ORDER BY day_of_week, start_time
                """,
                (availability_id,),
            )
            windows = tuple(
                AvailabilityWindow(
                    day_of_week=int(w["day_of_week"]),
                    start_time=normalize_mysql_time(w["start_time"]),
                    end_time=normalize_mysql_time(w["end_time"]),
                )
                for w in fetchall(cur)
            )

            cur.execute(
                """
                SELECT override_date, start_time, end_time, reason
                FROM employee_availability_overrides
                WHERE availability_id=%s
                ORDER BY override_date
                """,
                (availability_id,),
            )
            overrides = tuple(
                AvailabilityOverride(
                    override_date=normalize_mysql_date(o["override_date"]),
                    start_time=normalize_mysql_time(o.get("start_time")),
                    end_time=normalize_mysql_time(o.get("end_time")),
                    reason=o.get("reason") or "",
                )
                for o in fetchall(cur)
            )

            return Availability(
                availability_id=availability_id,
                owner_id=int(r["employee_id"]),
                windows=windows,
                effective_from=normalize_mysql_date(r.get("effective_from")),
                effective_to=normalize_mysql_date(r.get("effective_to")),
                overrides=overrides,
            )

    def upsert(
        self,
        *,
        owner_id: int,
        windows: Sequence[AvailabilityWindow],
        effective_from: Optional[date],
        effective_to: Optional[date],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_availability(employee_id, effective_from, effective_to)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE effective_from=VALUES(effective_from), effective_to=VALUES(effective_to)
                """,
                (int(owner_id), effective_from, effective_to),
            )

            # If it was an update, lastrowid can be 0; fetch availability_id.
            cur.execute("SELECT availability_id FROM employee_availability WHERE employee_id=%s", (int(owner_id),))
            r = fetchone(cur)
            availability_id = int(r["availability_id"])

            cur.execute("DELETE FROM employee_availability_windows WHERE availability_id=%s", (availability_id,))
            for w in windows:
                cur.execute(
                    """
                    INSERT INTO employee_availability_windows(availability_id, day_of_week, start_time, end_time)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (availability_id, int(w.day_of_week), format_local_time(w.start_time), format_local_time(w.end_time)),
                )
            return availability_id

    def create_override(self, *, availability_id: int, override: AvailabilityOverride) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employee_availability_overrides(availability_id, override_date, start_time, end_time, reason)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    int(availability_id),
                    override.override_date,
                    format_local_time(override.start_time),
                    format_local_time(override.end_time),
                    override.reason,
                ),
            )
            return int(cur.lastrowid)
