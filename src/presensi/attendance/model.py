from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..common.datetime_utils import format_hhmm
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class GeoLocation:
    latitude: float
    longitude: float
    address: str = ""

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "GeoLocation":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("location must be an object")
        return cls(
            latitude=float(data.get("latitude") or 0),
            longitude=float(data.get("longitude") or 0),
            address=str(data.get("address") or ""),
        )

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude, "address": self.address}


@dataclass(frozen=True)
class CheckEvent:
    """Time, photo and location captured at check-in or check-out."""

    time: time
    photo: str
    location: GeoLocation

    def to_dict(self) -> dict:
        return {"time": format_hhmm(self.time), "photo": self.photo, "location": self.location.to_dict()}


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day.

    ``work_hours`` is meaningful only once ``check_out`` is set.
    """

    attendance_id: str
    user_id: str
    work_date: date
    check_in: Optional[CheckEvent]
    check_out: Optional[CheckEvent]
    status: AttendanceStatus
    work_hours: float = 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "checkIn": self.check_in.to_dict() if self.check_in else None,
            "checkOut": self.check_out.to_dict() if self.check_out else None,
            "status": self.status.value,
            "workHours": self.work_hours,
        }
