from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from .model import WorkSchedule


class ScheduleRepository(Protocol):
    def get_by_weekday(self, day_of_week: int) -> Optional[WorkSchedule]:
        """Active schedule for the weekday, or None."""

        raise NotImplementedError

    def list_active(self) -> Sequence[WorkSchedule]:
        raise NotImplementedError

    def update(
        self,
        *,
        day_of_week: int,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
        min_work_hours: Optional[float] = None,
    ) -> bool:
        """Update the given fields in place. Returns False when no row matched."""

        raise NotImplementedError
