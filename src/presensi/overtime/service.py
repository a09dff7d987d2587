from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.calculator.base import WorkedTimeCalculator
from ..attendance.calculator.same_day_calculator import SameDayCalculator
from ..attendance.repository import AttendanceRepository
from ..attendance.service import minimum_hours_error
from ..common.datetime_utils import Clock, format_hours, now_local, time_of_day, weekday_index
from ..common.ids import IdFactory, new_id
from ..common.validators import require_admin
from ..core.constants import DEFAULT_MIN_WORK_HOURS, MINUTES_PER_HOUR
from ..core.enums import OvertimeStatus
from ..core.exceptions import (
    CheckInRequired,
    CheckOutRequired,
    DuplicateRecord,
    NoOpenOvertime,
    OvertimeAlreadyOpen,
    ReasonRequired,
    RecordNotFound,
)
from ..schedules.service import ScheduleService
from ..users.model import Actor
from .model import OvertimeRecord
from .repository import OvertimeRepository

logger = logging.getLogger(__name__)


class OvertimeService:
    """Overtime lifecycle gated by a completed attendance day.

    Unlike check-in/out, a missing schedule here falls back to
    ``DEFAULT_MIN_WORK_HOURS`` instead of failing.
    """

    def __init__(
        self,
        overtime: OvertimeRepository,
        attendance: AttendanceRepository,
        schedules: ScheduleService,
        *,
        calculator: WorkedTimeCalculator | None = None,
        clock: Clock | None = None,
        id_factory: IdFactory | None = None,
        default_min_work_hours: float = DEFAULT_MIN_WORK_HOURS,
    ):
        self._overtime = overtime
        self._attendance = attendance
        self._schedules = schedules
        self._calculator = calculator or SameDayCalculator()
        self._clock = clock or now_local
        self._new_id = id_factory or new_id
        self._default_min_work_hours = float(default_min_work_hours)

    def start(self, user_id: str, reason: Optional[str], *, now: datetime | None = None) -> OvertimeRecord:
        reason = (reason or "").strip()
        if not reason:
            raise ReasonRequired()

        now = now or self._clock()
        today = now.date()

        attendance = self._attendance.get_for_user_and_date(user_id, today)
        if not attendance or attendance.check_in is None:
            raise CheckInRequired()
        if attendance.check_out is None:
            raise CheckOutRequired()

        schedule = self._schedules.find(weekday_index(today))
        required = schedule.min_work_hours if schedule else self._default_min_work_hours
        if attendance.work_hours < required:
            worked_minutes = int(round(attendance.work_hours * MINUTES_PER_HOUR))
            raise minimum_hours_error(
                required,
                worked_minutes,
                lead=f"Anda harus memenuhi minimal {format_hours(required)} jam kerja sebelum lembur",
            )

        if self._overtime.get_open_for_user_and_date(user_id, today):
            raise OvertimeAlreadyOpen()

        overtime_id = self._new_id("ot")
        try:
            self._overtime.create(
                overtime_id=overtime_id,
                user_id=user_id,
                work_date=today,
                start_time=time_of_day(now),
                reason=reason,
            )
        except DuplicateRecord:
            raise OvertimeAlreadyOpen()

        logger.info("Overtime %s started by %s", overtime_id, user_id)
        return self._reload(overtime_id)

    def end(self, user_id: str, *, now: datetime | None = None) -> OvertimeRecord:
        now = now or self._clock()
        today = now.date()
        at = time_of_day(now)

        record = self._overtime.get_open_for_user_and_date(user_id, today)
        if not record:
            raise NoOpenOvertime()

        minutes = self._calculator.worked_minutes(record.start_time, at)
        duration = round(max(0.0, minutes / MINUTES_PER_HOUR), 2)
        if not self._overtime.close(overtime_id=record.overtime_id, end_time=at, duration=duration):
            raise NoOpenOvertime()

        logger.info("Overtime %s ended by %s (%.2f h)", record.overtime_id, user_id, duration)
        return self._reload(record.overtime_id)

    def decide(
        self,
        *,
        actor: Actor,
        overtime_id: Optional[str],
        approve: bool,
        now: datetime | None = None,
    ) -> OvertimeRecord:
        require_admin(actor)

        if not overtime_id or self._overtime.get_by_id(overtime_id) is None:
            raise RecordNotFound("Data lembur tidak ditemukan")

        # Open records may be decided too; closing is a separate axis.
        status = OvertimeStatus.APPROVED if approve else OvertimeStatus.REJECTED
        ok = self._overtime.decide(
            overtime_id=overtime_id,
            status=status,
            approved_by=actor.user_id,
            approved_at=now or self._clock(),
        )
        if not ok:
            raise RecordNotFound("Data lembur tidak ditemukan")

        logger.info("Overtime %s %s by %s", overtime_id, status.value, actor.user_id)
        return self._reload(overtime_id)

    def list_records(
        self,
        *,
        actor: Actor,
        user_id: Optional[str] = None,
        status: Optional[OvertimeStatus] = None,
    ) -> Sequence[OvertimeRecord]:
        target = (user_id or None) if actor.is_admin else actor.user_id
        return self._overtime.list_records(user_id=target, status=status)

    def _reload(self, overtime_id: str) -> OvertimeRecord:
        record = self._overtime.get_by_id(overtime_id)
        if record is None:
            raise RecordNotFound("Data lembur tidak ditemukan")
        return record
