from __future__ import annotations

from datetime import time

from ...core.enums import AttendanceStatus
from ...schedules.model import WorkSchedule
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """On-time check-in."""

    def decide_checkin(self, *, check_in_time: time, schedule: WorkSchedule) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT, is_late=False, message="Check-in berhasil")
