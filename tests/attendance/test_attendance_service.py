from __future__ import annotations

from datetime import date, time

import pytest

from presensi.attendance.service import AttendanceService
from presensi.core.enums import AttendanceStatus, Role
from presensi.core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    DuplicateRecord,
    MinimumHoursNotMet,
    NotCheckedIn,
    ScheduleMissing,
)
from presensi.schedules.model import WorkSchedule
from presensi.schedules.service import ScheduleService
from presensi.users.model import Actor

MONDAY = date(2026, 1, 5)
SATURDAY = date(2026, 1, 10)


@pytest.fixture
def service(attendance_repo, schedules_repo, id_factory):
    return AttendanceService(attendance_repo, ScheduleService(schedules_repo), id_factory=id_factory)


def test_checkin_on_start_minute_is_present(service, location, moment):
    result = service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 0))

    assert result.is_late is False
    assert result.message == "Check-in berhasil"
    assert result.record.status == AttendanceStatus.PRESENT
    assert result.record.check_in.time == time(8, 0)
    assert result.record.check_out is None
    assert result.record.work_hours == 0.0


def test_checkin_seconds_are_dropped(service, location, moment):
    result = service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 0, 59))

    assert result.record.status == AttendanceStatus.PRESENT
    assert result.record.check_in.time == time(8, 0)


def test_checkin_after_start_is_late(service, location, moment):
    result = service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 15))

    assert result.is_late is True
    assert result.message == "Check-in berhasil (Terlambat)"
    assert result.record.status == AttendanceStatus.LATE


def test_second_checkin_fails_and_keeps_first(service, attendance_repo, location, moment):
    service.check_in("emp-001", photo="first", location=location, now=moment(MONDAY, 7, 55))

    with pytest.raises(AlreadyCheckedIn):
        service.check_in("emp-001", photo="second", location=location, now=moment(MONDAY, 9, 0))

    rec = attendance_repo.get_for_user_and_date("emp-001", MONDAY)
    assert rec.check_in.photo == "first"
    assert rec.status == AttendanceStatus.PRESENT
    assert len(attendance_repo.by_id) == 1


def test_checkin_fills_precreated_record(service, attendance_repo, make_record, location, moment):
    attendance_repo.add(
        make_record(attendance_id="att-absent", check_in=None, check_out=None, status=AttendanceStatus.ABSENT, work_hours=0.0)
    )

    result = service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 30))

    assert result.record.attendance_id == "att-absent"
    assert result.record.status == AttendanceStatus.LATE
    assert len(attendance_repo.by_id) == 1


def test_checkin_without_schedule_writes_nothing(service, schedules_repo, attendance_repo, location, moment):
    del schedules_repo.by_day[1]

    with pytest.raises(ScheduleMissing) as exc:
        service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 0))

    assert exc.value.weekday == 1
    assert attendance_repo.by_id == {}


def test_checkout_after_full_day(service, location, moment):
    service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 0))
    rec = service.check_out("emp-001", photo="q", location=location, now=moment(MONDAY, 16, 0))

    assert rec.check_out.time == time(16, 0)
    assert rec.check_out.photo == "q"
    assert rec.work_hours == 8.0
    assert rec.status == AttendanceStatus.PRESENT


def test_checkout_short_day_reports_remaining_and_keeps_record(service, attendance_repo, location, moment):
    service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 0))

    with pytest.raises(MinimumHoursNotMet) as exc:
        service.check_out("emp-001", photo="q", location=location, now=moment(MONDAY, 15, 0))

    assert (exc.value.remaining_hours, exc.value.remaining_minutes) == (1, 0)
    assert "Sisa waktu: 1 jam 0 menit" in exc.value.message
    rec = attendance_repo.get_for_user_and_date("emp-001", MONDAY)
    assert rec.check_out is None
    assert rec.work_hours == 0.0


def test_checkout_one_minute_short(service, location, moment):
    service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 0))

    with pytest.raises(MinimumHoursNotMet) as exc:
        service.check_out("emp-001", photo="q", location=location, now=moment(MONDAY, 15, 59, 30))

    assert (exc.value.remaining_hours, exc.value.remaining_minutes) == (0, 1)
    assert exc.value.remaining_text == "1 menit"


def test_saturday_uses_shorter_minimum(service, location, moment):
    service.check_in("emp-001", photo="p", location=location, now=moment(SATURDAY, 8, 0))
    rec = service.check_out("emp-001", photo="q", location=location, now=moment(SATURDAY, 13, 0))

    assert rec.work_hours == 5.0


def test_work_hours_rounded_to_two_decimals(service, location, moment):
    service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 0))
    rec = service.check_out("emp-001", photo="q", location=location, now=moment(MONDAY, 16, 10))

    assert rec.work_hours == 8.17


def test_checkout_without_checkin(service, location, moment):
    with pytest.raises(NotCheckedIn):
        service.check_out("emp-001", photo="q", location=location, now=moment(MONDAY, 16, 0))


def test_checkout_twice(service, location, moment):
    service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 0))
    service.check_out("emp-001", photo="q", location=location, now=moment(MONDAY, 16, 0))

    with pytest.raises(AlreadyCheckedOut):
        service.check_out("emp-001", photo="r", location=location, now=moment(MONDAY, 17, 0))


def test_get_today_record(service, location, moment):
    assert service.get_today_record("emp-001", today=MONDAY) is None

    service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 0))

    assert service.get_today_record("emp-001", today=MONDAY).user_id == "emp-001"


def test_employee_only_lists_own_records(service, attendance_repo, make_record, employee, admin):
    attendance_repo.add(make_record(attendance_id="a1", user_id="emp-001"))
    attendance_repo.add(make_record(attendance_id="a2", user_id="emp-002"))

    own = service.list_records(actor=employee, user_id="emp-002")
    everyone = service.list_records(actor=admin)
    other = service.list_records(actor=admin, user_id="emp-002")

    assert [r.attendance_id for r in own] == ["a1"]
    assert {r.attendance_id for r in everyone} == {"a1", "a2"}
    assert [r.attendance_id for r in other] == ["a2"]


def test_month_filter_needs_year(service, attendance_repo, make_record):
    attendance_repo.add(make_record(attendance_id="jan", work_date=date(2026, 1, 5)))
    attendance_repo.add(make_record(attendance_id="feb", work_date=date(2026, 2, 2)))
    actor = Actor(user_id="emp-001", role=Role.EMPLOYEE)

    assert len(service.list_records(actor=actor, month=1)) == 2
    assert [r.attendance_id for r in service.list_records(actor=actor, month=2, year=2026)] == ["feb"]


def test_checkout_message_shows_whole_hours(service, location, moment):
    service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 0))

    with pytest.raises(MinimumHoursNotMet) as exc:
        service.check_out("emp-001", photo="q", location=location, now=moment(MONDAY, 12, 0))

    assert exc.value.message == "Anda belum memenuhi jam kerja minimal (8 jam). Sisa waktu: 4 jam 0 menit"


def test_checkout_before_checkin_rejected_even_without_minimum(
    service, schedules_repo, attendance_repo, make_record, location, moment
):
    schedules_repo.by_day[1] = WorkSchedule(1, time(8, 0), time(16, 0), 0.0)
    attendance_repo.add(make_record(check_in=time(10, 0), check_out=None, work_hours=0.0))

    with pytest.raises(MinimumHoursNotMet) as exc:
        service.check_out("emp-001", photo="q", location=location, now=moment(MONDAY, 9, 0))

    assert (exc.value.remaining_hours, exc.value.remaining_minutes) == (1, 0)
    assert attendance_repo.get_by_id("att-x").check_out is None

    rec = service.check_out("emp-001", photo="q", location=location, now=moment(MONDAY, 10, 0))

    assert rec.work_hours == 0.0


class LostInsertAttendance:
    """Lookup sees no row, but the insert collides with one written meanwhile."""

    def __init__(self, inner):
        self._inner = inner

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def get_for_user_and_date(self, user_id, work_date):
        return None

    def create_checkin(self, **kwargs):
        raise DuplicateRecord()


def test_concurrent_insert_reports_already_checked_in(attendance_repo, schedules_repo, id_factory, location, moment):
    service = AttendanceService(
        LostInsertAttendance(attendance_repo), ScheduleService(schedules_repo), id_factory=id_factory
    )

    with pytest.raises(AlreadyCheckedIn):
        service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 0))

    assert attendance_repo.by_id == {}


class LostUpdateAttendance:
    """Lookup returns the empty row, but another request fills it first."""

    def __init__(self, inner):
        self._inner = inner

    def __getattr__(self, name):
        return getattr(self._inner, name)

    def update_checkin(self, **kwargs):
        return False


def test_concurrent_fill_reports_already_checked_in(
    attendance_repo, schedules_repo, id_factory, make_record, location, moment
):
    attendance_repo.add(
        make_record(attendance_id="att-absent", check_in=None, check_out=None, status=AttendanceStatus.ABSENT, work_hours=0.0)
    )
    service = AttendanceService(
        LostUpdateAttendance(attendance_repo), ScheduleService(schedules_repo), id_factory=id_factory
    )

    with pytest.raises(AlreadyCheckedIn):
        service.check_in("emp-001", photo="p", location=location, now=moment(MONDAY, 8, 0))

    assert attendance_repo.get_by_id("att-absent").check_in is None
