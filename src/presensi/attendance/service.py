from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import Clock, deficit_minutes, now_local, split_minutes, time_of_day
from ..common.ids import IdFactory, new_id
from ..core.constants import MINUTES_PER_HOUR
from ..core.exceptions import (
    AlreadyCheckedIn,
    AlreadyCheckedOut,
    DuplicateRecord,
    MinimumHoursNotMet,
    NotCheckedIn,
    RecordNotFound,
)
from ..schedules.service import ScheduleService
from ..users.model import Actor
from .calculator.base import WorkedTimeCalculator
from .calculator.same_day_calculator import SameDayCalculator
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, CheckEvent, GeoLocation
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInResult:
    record: AttendanceRecord
    is_late: bool
    message: str


def minimum_hours_error(required_hours: float, worked_minutes: int, *, lead: Optional[str] = None) -> MinimumHoursNotMet:
    hours, minutes = split_minutes(deficit_minutes(required_hours, worked_minutes))
    return MinimumHoursNotMet(
        required_hours=required_hours,
        remaining_hours=hours,
        remaining_minutes=minutes,
        lead=lead,
    )


class AttendanceService:
    """Daily attendance: NoRecord -> CheckedIn -> CheckedOut.

    Records are only written on the success branch of each operation; every
    failure leaves storage untouched.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        schedules: ScheduleService,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        calculator: WorkedTimeCalculator | None = None,
        clock: Clock | None = None,
        id_factory: IdFactory | None = None,
    ):
        self._attendance = attendance
        self._schedules = schedules
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._calculator = calculator or SameDayCalculator()
        self._clock = clock or now_local
        self._new_id = id_factory or new_id

    def check_in(
        self,
        user_id: str,
        *,
        photo: str,
        location: GeoLocation,
        now: datetime | None = None,
    ) -> CheckInResult:
        now = now or self._clock()
        today = now.date()
        at = time_of_day(now)

        schedule = self._schedules.resolve_for_date(today)

        existing = self._attendance.get_for_user_and_date(user_id, today)
        if existing and existing.check_in is not None:
            raise AlreadyCheckedIn()

        strategy = self._factory.for_checkin(check_in_time=at, schedule=schedule)
        decision = strategy.decide_checkin(check_in_time=at, schedule=schedule)
        event = CheckEvent(time=at, photo=photo or "", location=location)

        if existing:
            attendance_id = existing.attendance_id
            if not self._attendance.update_checkin(attendance_id=attendance_id, check_in=event, status=decision.status):
                # another request filled the check-in first
                raise AlreadyCheckedIn()
        else:
            attendance_id = self._new_id("att")
            try:
                self._attendance.create_checkin(
                    attendance_id=attendance_id,
                    user_id=user_id,
                    work_date=today,
                    check_in=event,
                    status=decision.status,
                )
            except DuplicateRecord:
                # a concurrent check-in won the unique (user_id, date) slot
                raise AlreadyCheckedIn()

        record = self._reload(attendance_id)
        logger.info("User %s checked in at %s (%s)", user_id, at.strftime("%H:%M"), decision.status.value)
        return CheckInResult(record=record, is_late=decision.is_late, message=decision.message)

    def check_out(
        self,
        user_id: str,
        *,
        photo: str,
        location: GeoLocation,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = now or self._clock()
        today = now.date()
        at = time_of_day(now)

        schedule = self._schedules.resolve_for_date(today)

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.check_in is None:
            raise NotCheckedIn()
        if record.check_out is not None:
            raise AlreadyCheckedOut()

        minutes = self._calculator.worked_minutes(record.check_in.time, at)
        work_hours = minutes / MINUTES_PER_HOUR
        if work_hours < schedule.min_work_hours:
            logger.debug("Check-out rejected for %s: %s of %s hours", user_id, work_hours, schedule.min_work_hours)
            raise minimum_hours_error(schedule.min_work_hours, minutes)

        event = CheckEvent(time=at, photo=photo or "", location=location)
        ok = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out=event,
            work_hours=round(max(0.0, work_hours), 2),
        )
        if not ok:
            raise AlreadyCheckedOut()

        logger.info("User %s checked out at %s (%.2f h)", user_id, at.strftime("%H:%M"), max(0.0, work_hours))
        return self._reload(record.attendance_id)

    def get_today_record(self, user_id: str, today: date | None = None) -> Optional[AttendanceRecord]:
        """Get today's attendance record for a user"""
        today = today or self._clock().date()
        return self._attendance.get_for_user_and_date(user_id, today)

    def list_records(
        self,
        *,
        actor: Actor,
        user_id: Optional[str] = None,
        work_date: Optional[date] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        # Employees only ever see their own records.
        target = (user_id or None) if actor.is_admin else actor.user_id
        if month is None or year is None:
            month = year = None
        return self._attendance.list_records(user_id=target, work_date=work_date, month=month, year=year)

    def _reload(self, attendance_id: str) -> AttendanceRecord:
        record = self._attendance.get_by_id(attendance_id)
        if record is None:
            raise RecordNotFound("Data presensi tidak ditemukan")
        return record
