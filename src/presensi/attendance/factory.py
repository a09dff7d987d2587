from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..common.datetime_utils import minute_of_day
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES
from ..schedules.model import WorkSchedule
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the check-in strategy.

    Late means strictly after start time (plus grace); checking in exactly at
    the start minute is on time.
    """

    grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES

    def for_checkin(self, *, check_in_time: time, schedule: WorkSchedule) -> AttendanceStrategy:
        limit = minute_of_day(schedule.start_time) + int(self.grace_minutes)
        if minute_of_day(check_in_time) > limit:
            return LateStrategy()
        return PresentStrategy()
