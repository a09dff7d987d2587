from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import format_hhmm
from ..core.enums import OvertimeStatus


@dataclass(frozen=True)
class OvertimeRecord:
    """Domain entity: an overtime session.

    Approval (``status``) and closure (``end_time``) change independently.
    """

    overtime_id: str
    user_id: str
    work_date: date
    start_time: time
    end_time: Optional[time]
    reason: str
    status: OvertimeStatus
    duration: float = 0.0
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def to_dict(self) -> dict:
        return {
            "id": self.overtime_id,
            "userId": self.user_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "startTime": format_hhmm(self.start_time),
            "endTime": format_hhmm(self.end_time),
            "duration": self.duration,
            "reason": self.reason,
            "status": self.status.value,
            "approvedBy": self.approved_by,
            "approvedAt": self.approved_at.isoformat(sep=" ") if self.approved_at else None,
        }
