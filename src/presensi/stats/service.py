from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock, now_local
from ..common.validators import require_month
from ..core.enums import AttendanceStatus
from ..users.model import Actor


@dataclass(frozen=True)
class AttendanceStats:
    user_id: str
    month: int
    year: int
    present: int
    late: int
    absent: int
    total_work_hours: float
    total: int

    def to_dict(self) -> dict:
        return {
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
            "totalWorkHours": self.total_work_hours,
            "total": self.total,
        }


class StatsService:
    """Monthly roll-up of one employee's attendance records."""

    def __init__(self, attendance: AttendanceRepository, *, clock: Clock | None = None):
        self._attendance = attendance
        self._clock = clock or now_local

    def stats(
        self,
        *,
        actor: Actor,
        user_id: Optional[str] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
        today: Optional[date] = None,
    ) -> AttendanceStats:
        today = today or self._clock().date()
        month = require_month(month) if month is not None else today.month
        year = int(year) if year is not None else today.year

        target = user_id if (actor.is_admin and user_id) else actor.user_id

        records = [
            r
            for r in self._attendance.list_records(user_id=target, month=month, year=year)
            if r.user_id == target and r.work_date.month == month and r.work_date.year == year
        ]

        counts = Counter(r.status for r in records)
        total_hours = sum(float(r.work_hours or 0) for r in records)

        return AttendanceStats(
            user_id=target,
            month=month,
            year=year,
            present=counts.get(AttendanceStatus.PRESENT, 0),
            late=counts.get(AttendanceStatus.LATE, 0),
            absent=counts.get(AttendanceStatus.ABSENT, 0),
            total_work_hours=round(total_hours, 2),
            total=len(records),
        )
