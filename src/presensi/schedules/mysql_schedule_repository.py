from __future__ import annotations

from datetime import time
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import WorkSchedule
from .repository import ScheduleRepository


def _to_schedule(r: dict) -> WorkSchedule:
    return WorkSchedule(
        day_of_week=int(r["day_of_week"]),
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        min_work_hours=as_float(r["min_work_hours"]),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_weekday(self, day_of_week: int) -> Optional[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT day_of_week, start_time, end_time, min_work_hours, is_active
                FROM work_schedules
                WHERE day_of_week=%s AND is_active=TRUE
                """,
                (int(day_of_week),),
            )
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def list_active(self) -> Sequence[WorkSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT day_of_week, start_time, end_time, min_work_hours, is_active
                FROM work_schedules
                WHERE is_active=TRUE
                ORDER BY day_of_week
                """
            )
            return [_to_schedule(r) for r in fetchall(cur)]

    def update(
        self,
        *,
        day_of_week: int,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        min_work_hours: Optional[float] = None,
    ) -> bool:
        sets: list[str] = []
        params: list[object] = []
        if start_time is not None:
            sets.append("start_time=%s")
            params.append(start_time)
        if end_time is not None:
            sets.append("end_time=%s")
            params.append(end_time)
        if min_work_hours is not None:
            sets.append("min_work_hours=%s")
            params.append(min_work_hours)
        if not sets:
            return False
        params.append(int(day_of_week))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE work_schedules SET {', '.join(sets)} WHERE day_of_week=%s", tuple(params))
            if cur.rowcount > 0:
                return True
            # rowcount is 0 when the values did not change; check the row exists
            cur.execute("SELECT 1 AS found FROM work_schedules WHERE day_of_week=%s", (int(day_of_week),))
            return fetchone(cur) is not None
