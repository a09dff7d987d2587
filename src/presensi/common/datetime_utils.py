from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from ..core.constants import MINUTES_PER_HOUR

Clock = Callable[[], datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse ``HH:MM`` (or ``HH:MM:SS``) into a time truncated to the minute."""
    v = (value or "").strip()
    fmt = "%H:%M:%S" if v.count(":") == 2 else "%H:%M"
    return truncate_to_minute(datetime.strptime(v, fmt).time())


def format_hhmm(value: Optional[time]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime("%H:%M")


def now_local() -> datetime:
    """Current process-local time."""
    return datetime.now()


def make_clock(tz_name: Optional[str] = None) -> Clock:
    """Build a clock returning naive wall-clock time in ``tz_name``.

    Without a timezone the process local time is used.
    """
    if not tz_name:
        return now_local

    tz = ZoneInfo(tz_name)

    def _now() -> datetime:
        return datetime.now(tz).replace(tzinfo=None)

    return _now


def truncate_to_minute(value: time) -> time:
    return value.replace(second=0, microsecond=0)


def time_of_day(moment: datetime) -> time:
    """Time-of-day of ``moment`` at minute resolution (seconds dropped)."""
    return truncate_to_minute(moment.time())


def minute_of_day(value: time) -> int:
    return value.hour * MINUTES_PER_HOUR + value.minute


def weekday_index(day: date) -> int:
    """Day-of-week with Sunday=0 .. Saturday=6, matching schedule keys."""
    return day.isoweekday() % 7


def split_minutes(total_minutes: int) -> tuple[int, int]:
    """Split minutes into (hours, minutes)."""
    return total_minutes // MINUTES_PER_HOUR, total_minutes % MINUTES_PER_HOUR


def deficit_minutes(required_hours: float, worked_minutes: int) -> int:
    """Minutes still missing to reach ``required_hours``, rounded up."""
    missing = required_hours * MINUTES_PER_HOUR - worked_minutes
    # round() first so float noise like 60.0000000001 does not ceil to 61
    return max(0, math.ceil(round(missing, 6)))


def format_hours(hours: float) -> str:
    """``8.0`` -> ``"8"``, ``7.5`` -> ``"7.5"``."""
    return f"{float(hours):g}"
