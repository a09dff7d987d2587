from __future__ import annotations

from datetime import time

from ...common.datetime_utils import minute_of_day
from .base import WorkedTimeCalculator


class SameDayCalculator(WorkedTimeCalculator):
    """Standard rule: minute-of-day(end) - minute-of-day(start).

    Assumes both times fall on the same calendar day. A span crossing
    midnight comes out negative; callers floor it to zero.
    """

    def worked_minutes(self, start: time, end: time) -> int:
        return minute_of_day(end) - minute_of_day(start)
