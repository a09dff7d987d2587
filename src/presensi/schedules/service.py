from __future__ import annotations

import logging
from datetime import date, time
from typing import Optional, Sequence, Union

from ..common.datetime_utils import parse_hhmm, weekday_index
from ..common.validators import require_admin
from ..core.constants import HOURS_PER_DAY
from ..core.exceptions import RecordNotFound, ScheduleMissing, ValidationError
from ..users.model import Actor
from .model import WorkSchedule
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)

TimeInput = Union[str, time, None]


class ScheduleService:
    """Resolves the working schedule of a day and lets admins edit it."""

    def __init__(self, schedules: ScheduleRepository):
        self._schedules = schedules

    def find(self, weekday: int) -> Optional[WorkSchedule]:
        return self._schedules.get_by_weekday(int(weekday))

    def resolve(self, weekday: int) -> WorkSchedule:
        schedule = self.find(weekday)
        if schedule is None:
            raise ScheduleMissing(int(weekday))
        return schedule

    def resolve_for_date(self, work_date: date) -> WorkSchedule:
        return self.resolve(weekday_index(work_date))

    def list_active(self) -> Sequence[WorkSchedule]:
        return sorted(self._schedules.list_active(), key=lambda s: s.day_of_week)

    @staticmethod
    def _parse_time(value: TimeInput) -> Optional[time]:
        if value is None or isinstance(value, time):
            return value
        if not isinstance(value, str):
            raise ValidationError("Format jam tidak valid (HH:MM)")
        if not value.strip():
            return None
        try:
            return parse_hhmm(value)
        except ValueError:
            raise ValidationError("Format jam tidak valid (HH:MM)")

    def update(
        self,
        *,
        actor: Actor,
        day_of_week: Optional[int],
        start_time: TimeInput = None,
        end_time: TimeInput = None,
        min_work_hours: Optional[float] = None,
    ) -> Sequence[WorkSchedule]:
        require_admin(actor)

        if day_of_week is None or not 0 <= int(day_of_week) <= 6:
            raise ValidationError("Hari tidak valid")

        start_t = self._parse_time(start_time)
        end_t = self._parse_time(end_time)

        hours: Optional[float] = None
        if min_work_hours is not None:
            try:
                hours = float(min_work_hours)
            except (TypeError, ValueError):
                raise ValidationError("Jam kerja minimal tidak valid")
            if hours < 0 or hours > HOURS_PER_DAY:
                raise ValidationError("Jam kerja minimal tidak valid")

        if start_t is None and end_t is None and hours is None:
            raise ValidationError("Tidak ada data yang diupdate")

        ok = self._schedules.update(
            day_of_week=int(day_of_week),
            start_time=start_t,
            end_time=end_t,
            min_work_hours=hours,
        )
        if not ok:
            raise RecordNotFound("Jadwal kerja tidak ditemukan")

        logger.info("Schedule for weekday %s updated by %s", day_of_week, actor.user_id)
        return self.list_active()
