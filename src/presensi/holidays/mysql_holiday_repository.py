from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_guard
from .model import Holiday
from .repository import HolidayRepository


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, holiday_date: date) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT date, name FROM holidays WHERE date=%s AND is_active=TRUE",
                (holiday_date,),
            )
            r = fetchone(cur)
            return Holiday(holiday_date=r["date"], name=r["name"]) if r else None

    def list(self, *, year: Optional[int] = None) -> Sequence[Holiday]:
        sql = "SELECT date, name FROM holidays WHERE is_active=TRUE"
        params: list[object] = []
        if year is not None:
            sql += " AND YEAR(date)=%s"
            params.append(int(year))
        sql += " ORDER BY date"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [Holiday(holiday_date=r["date"], name=r["name"]) for r in fetchall(cur)]

    def add(self, *, holiday_date: date, name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            with unique_guard():
                cur.execute("INSERT INTO holidays(date, name) VALUES(%s,%s)", (holiday_date, name))

    def update(self, *, old_date: date, new_date: Optional[date] = None, name: Optional[str] = None) -> bool:
        sets: list[str] = []
        params: list[object] = []
        if new_date is not None:
            sets.append("date=%s")
            params.append(new_date)
        if name is not None:
            sets.append("name=%s")
            params.append(name)
        if not sets:
            return False
        params.append(old_date)

        with db_cursor(self._conn_factory) as (_, cur):
            with unique_guard():
                cur.execute(f"UPDATE holidays SET {', '.join(sets)} WHERE date=%s", tuple(params))
            if cur.rowcount > 0:
                return True
            # unchanged values report 0 affected rows
            cur.execute("SELECT 1 AS found FROM holidays WHERE date=%s", (new_date or old_date,))
            return fetchone(cur) is not None

    def remove(self, holiday_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE date=%s", (holiday_date,))
            return cur.rowcount > 0
