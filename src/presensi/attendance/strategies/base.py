from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import time

from ...core.enums import AttendanceStatus
from ...schedules.model import WorkSchedule


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    is_late: bool
    message: str


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide a check-in status."""

    @abstractmethod
    def decide_checkin(self, *, check_in_time: time, schedule: WorkSchedule) -> StatusDecision:
        raise NotImplementedError
