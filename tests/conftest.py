from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date, datetime, time
from typing import Optional

import pytest

from presensi.attendance.model import AttendanceRecord, CheckEvent, GeoLocation
from presensi.core.enums import AttendanceStatus, OvertimeStatus, Role
from presensi.core.exceptions import DuplicateRecord
from presensi.holidays.model import Holiday
from presensi.overtime.model import OvertimeRecord
from presensi.schedules.model import WorkSchedule
from presensi.users.model import Actor, User

MONDAY = date(2026, 1, 5)


class InMemoryUsers:
    def __init__(self, users=()):
        self._by_id: dict[str, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.username == username), None)

    def list_active(self):
        return [u for u in self._by_id.values() if u.is_active]

    def create(self, user: User) -> None:
        if self.get_by_username(user.username):
            raise DuplicateRecord()
        self._by_id[user.user_id] = user

    def update(self, user_id: str, changes) -> bool:
        u = self._by_id.get(user_id)
        if u is None:
            return False
        self._by_id[user_id] = replace(u, **changes)
        return True

    def set_active(self, user_id: str, *, is_active: bool) -> bool:
        u = self._by_id.get(user_id)
        if u is None:
            return False
        self._by_id[user_id] = replace(u, is_active=is_active)
        return True


class InMemorySchedules:
    def __init__(self, schedules=()):
        self.by_day: dict[int, WorkSchedule] = {s.day_of_week: s for s in schedules}

    def get_by_weekday(self, day_of_week: int) -> Optional[WorkSchedule]:
        s = self.by_day.get(day_of_week)
        return s if s and s.is_active else None

    def list_active(self):
        return [s for s in self.by_day.values() if s.is_active]

    def update(self, *, day_of_week, start_time=None, end_time=None, min_work_hours=None) -> bool:
        s = self.by_day.get(day_of_week)
        if s is None:
            return False
        self.by_day[day_of_week] = replace(
            s,
            start_time=start_time or s.start_time,
            end_time=end_time or s.end_time,
            min_work_hours=s.min_work_hours if min_work_hours is None else min_work_hours,
        )
        return True


class InMemoryHolidays:
    def __init__(self, holidays=()):
        self.by_date: dict[date, Holiday] = {h.holiday_date: h for h in holidays}

    def get(self, holiday_date: date) -> Optional[Holiday]:
        return self.by_date.get(holiday_date)

    def list(self, *, year=None):
        return [h for h in self.by_date.values() if year is None or h.holiday_date.year == year]

    def add(self, *, holiday_date: date, name: str) -> None:
        if holiday_date in self.by_date:
            raise DuplicateRecord()
        self.by_date[holiday_date] = Holiday(holiday_date=holiday_date, name=name)

    def update(self, *, old_date, new_date=None, name=None) -> bool:
        h = self.by_date.pop(old_date, None)
        if h is None:
            return False
        target = new_date or old_date
        self.by_date[target] = Holiday(holiday_date=target, name=name or h.name)
        return True

    def remove(self, holiday_date: date) -> bool:
        return self.by_date.pop(holiday_date, None) is not None


class InMemoryAttendance:
    def __init__(self):
        self.by_id: dict[str, AttendanceRecord] = {}

    def add(self, record: AttendanceRecord) -> None:
        self.by_id[record.attendance_id] = record

    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        return self.by_id.get(attendance_id)

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self.by_id.values() if r.user_id == user_id and r.work_date == work_date),
            None,
        )

    def create_checkin(self, *, attendance_id, user_id, work_date, check_in, status) -> None:
        if self.get_for_user_and_date(user_id, work_date):
            raise DuplicateRecord()
        self.by_id[attendance_id] = AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=work_date,
            check_in=check_in,
            check_out=None,
            status=status,
        )

    def update_checkin(self, *, attendance_id, check_in, status) -> bool:
        r = self.by_id.get(attendance_id)
        if r is None or r.check_in is not None:
            return False
        self.by_id[attendance_id] = replace(r, check_in=check_in, status=status)
        return True

    def update_checkout(self, *, attendance_id, check_out, work_hours) -> bool:
        r = self.by_id.get(attendance_id)
        if r is None or r.check_out is not None:
            return False
        self.by_id[attendance_id] = replace(r, check_out=check_out, work_hours=work_hours)
        return True

    def list_records(self, *, user_id=None, work_date=None, month=None, year=None):
        items = [
            r
            for r in self.by_id.values()
            if (user_id is None or r.user_id == user_id)
            and (work_date is None or r.work_date == work_date)
            and (year is None or r.work_date.year == year)
            and (month is None or r.work_date.month == month)
        ]
        return sorted(items, key=lambda r: r.work_date, reverse=True)


class InMemoryOvertime:
    def __init__(self):
        self.by_id: dict[str, OvertimeRecord] = {}

    def get_by_id(self, overtime_id: str) -> Optional[OvertimeRecord]:
        return self.by_id.get(overtime_id)

    def get_open_for_user_and_date(self, user_id: str, work_date: date) -> Optional[OvertimeRecord]:
        return next(
            (r for r in self.by_id.values() if r.user_id == user_id and r.work_date == work_date and r.is_open),
            None,
        )

    def create(self, *, overtime_id, user_id, work_date, start_time, reason) -> None:
        if self.get_open_for_user_and_date(user_id, work_date):
            raise DuplicateRecord()
        self.by_id[overtime_id] = OvertimeRecord(
            overtime_id=overtime_id,
            user_id=user_id,
            work_date=work_date,
            start_time=start_time,
            end_time=None,
            reason=reason,
            status=OvertimeStatus.PENDING,
        )

    def close(self, *, overtime_id, end_time, duration) -> bool:
        r = self.by_id.get(overtime_id)
        if r is None or not r.is_open:
            return False
        self.by_id[overtime_id] = replace(r, end_time=end_time, duration=duration)
        return True

    def decide(self, *, overtime_id, status, approved_by, approved_at) -> bool:
        r = self.by_id.get(overtime_id)
        if r is None:
            return False
        self.by_id[overtime_id] = replace(r, status=status, approved_by=approved_by, approved_at=approved_at)
        return True

    def list_records(self, *, user_id=None, status=None):
        return [
            r
            for r in self.by_id.values()
            if (user_id is None or r.user_id == user_id) and (status is None or r.status == status)
        ]


def default_schedules():
    week = [WorkSchedule(day, time(8, 0), time(16, 0), 8.0) for day in range(6)]
    return week + [WorkSchedule(6, time(8, 0), time(13, 0), 5.0)]


def sequential_ids():
    counter = itertools.count(1)
    return lambda prefix: f"{prefix}-{next(counter)}"


@pytest.fixture
def schedules_repo():
    return InMemorySchedules(default_schedules())


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def overtime_repo():
    return InMemoryOvertime()


@pytest.fixture
def holidays_repo():
    return InMemoryHolidays([Holiday(date(2026, 1, 1), "Tahun Baru"), Holiday(date(2026, 12, 25), "Natal")])


@pytest.fixture
def id_factory():
    return sequential_ids()


@pytest.fixture
def employee():
    return Actor(user_id="emp-001", role=Role.EMPLOYEE)


@pytest.fixture
def admin():
    return Actor(user_id="admin-001", role=Role.ADMIN)


@pytest.fixture
def location():
    return GeoLocation(latitude=-6.2, longitude=106.8, address="Jakarta")


@pytest.fixture
def make_record():
    def _make(
        *,
        attendance_id="att-x",
        user_id="emp-001",
        work_date=MONDAY,
        check_in=time(8, 0),
        check_out=time(16, 0),
        status=AttendanceStatus.PRESENT,
        work_hours=8.0,
    ) -> AttendanceRecord:
        loc = GeoLocation(0.0, 0.0)
        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=work_date,
            check_in=CheckEvent(check_in, "", loc) if check_in else None,
            check_out=CheckEvent(check_out, "", loc) if check_out else None,
            status=status,
            work_hours=work_hours,
        )

    return _make


def at(day: date, hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute, second))


@pytest.fixture
def moment():
    return at


@pytest.fixture
def make_users():
    def _make(*users: User) -> InMemoryUsers:
        return InMemoryUsers(users)

    return _make
