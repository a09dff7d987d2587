from __future__ import annotations

from dataclasses import dataclass
from datetime import time


@dataclass(frozen=True)
class WorkSchedule:
    """Domain entity: working hours for one weekday (Sunday=0).

    ``end_time`` is informational; check-out is only gated by ``min_work_hours``.
    """

    day_of_week: int
    start_time: time
    end_time: time
    min_work_hours: float
    is_active: bool = True
