from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, normalize_mysql_time, unique_guard
from .model import AttendanceRecord, CheckEvent, GeoLocation
from .repository import AttendanceRepository

_COLUMNS = """
    id, user_id, date,
    check_in_time, check_in_photo, check_in_latitude, check_in_longitude, check_in_address,
    check_out_time, check_out_photo, check_out_latitude, check_out_longitude, check_out_address,
    status, work_hours
"""


def _event(r: dict, prefix: str) -> Optional[CheckEvent]:
    at = normalize_mysql_time(r.get(f"{prefix}_time"))
    if at is None:
        return None
    return CheckEvent(
        time=at,
        photo=r.get(f"{prefix}_photo") or "",
        location=GeoLocation(
            latitude=as_float(r.get(f"{prefix}_latitude")),
            longitude=as_float(r.get(f"{prefix}_longitude")),
            address=r.get(f"{prefix}_address") or "",
        ),
    )


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=str(r["id"]),
        user_id=str(r["user_id"]),
        work_date=r["date"],
        check_in=_event(r, "check_in"),
        check_out=_event(r, "check_out"),
        status=AttendanceStatus(r["status"]),
        work_hours=as_float(r.get("work_hours")),
    )


def _event_params(event: CheckEvent) -> tuple:
    return (
        event.time,
        event.photo,
        event.location.latitude,
        event.location.longitude,
        event.location.address,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE id=%s", (attendance_id,))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND date=%s",
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(
        self,
        *,
        attendance_id: str,
        user_id: str,
        work_date: date,
        check_in: CheckEvent,
        status: AttendanceStatus,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            with unique_guard():
                cur.execute(
                    """
                    INSERT INTO attendance_records
                        (id, user_id, date, check_in_time, check_in_photo,
                         check_in_latitude, check_in_longitude, check_in_address, status)
                    VALUES (%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (attendance_id, user_id, work_date, *_event_params(check_in), status.value),
                )

    def update_checkin(self, *, attendance_id: str, check_in: CheckEvent, status: AttendanceStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, check_in_photo=%s, check_in_latitude=%s,
                    check_in_longitude=%s, check_in_address=%s, status=%s
                WHERE id=%s AND check_in_time IS NULL
                """,
                (*_event_params(check_in), status.value, attendance_id),
            )
            return cur.rowcount > 0

    def update_checkout(self, *, attendance_id: str, check_out: CheckEvent, work_hours: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, check_out_photo=%s, check_out_latitude=%s,
                    check_out_longitude=%s, check_out_address=%s, work_hours=%s
                WHERE id=%s AND check_out_time IS NULL
                """,
                (*_event_params(check_out), work_hours, attendance_id),
            )
            return cur.rowcount > 0

    def list_records(
        self,
        *,
        user_id: Optional[str] = None,
        work_date: Optional[date] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["1=1"]
        params: list[object] = []

        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(user_id)
        if work_date is not None:
            clauses.append("date=%s")
            params.append(work_date)
        if month is not None and year is not None:
            clauses.append("MONTH(date)=%s AND YEAR(date)=%s")
            params.extend([int(month), int(year)])

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY date DESC, check_in_time DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
