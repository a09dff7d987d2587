from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Sequence

from ..core.enums import OvertimeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, normalize_mysql_time, unique_guard
from .model import OvertimeRecord
from .repository import OvertimeRepository

_COLUMNS = "id, user_id, date, start_time, end_time, duration, reason, status, approved_by, approved_at"


def _to_record(r: dict) -> OvertimeRecord:
    return OvertimeRecord(
        overtime_id=str(r["id"]),
        user_id=str(r["user_id"]),
        work_date=r["date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r.get("end_time")),
        reason=r["reason"],
        status=OvertimeStatus(r["status"]),
        duration=as_float(r.get("duration")),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
    )


class MySQLOvertimeRepository(OvertimeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, overtime_id: str) -> Optional[OvertimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM overtime_records WHERE id=%s", (overtime_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_open_for_user_and_date(self, user_id: str, work_date: date) -> Optional[OvertimeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM overtime_records
                WHERE user_id=%s AND date=%s AND end_time IS NULL
                """,
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(
        self,
        *,
        overtime_id: str,
        user_id: str,
        work_date: date,
        start_time: time,
        reason: str,
    ) -> None:
        # uq_open_overtime (user_id, date, open_marker) rejects a second open row
        with db_cursor(self._conn_factory) as (_, cur):
            with unique_guard():
                cur.execute(
                    """
                    INSERT INTO overtime_records (id, user_id, date, start_time, reason, status)
                    VALUES (%s,%s,%s,%s,%s,%s)
                    """,
                    (overtime_id, user_id, work_date, start_time, reason, OvertimeStatus.PENDING.value),
                )

    def close(self, *, overtime_id: str, end_time: time, duration: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE overtime_records SET end_time=%s, duration=%s WHERE id=%s AND end_time IS NULL",
                (end_time, duration, overtime_id),
            )
            return cur.rowcount > 0

    def decide(
        self,
        *,
        overtime_id: str,
        status: OvertimeStatus,
        approved_by: str,
        approved_at: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE overtime_records SET status=%s, approved_by=%s, approved_at=%s WHERE id=%s",
                (status.value, approved_by, approved_at, overtime_id),
            )
            return cur.rowcount > 0

    def list_records(
        self,
        *,
        user_id: Optional[str] = None,
        status: Optional[OvertimeStatus] = None,
    ) -> Sequence[OvertimeRecord]:
        clauses = ["1=1"]
        params: list[object] = []
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(user_id)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM overtime_records
                WHERE {where}
                ORDER BY date DESC, start_time DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
