from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, CheckEvent


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        attendance_id: str,
        user_id: str,
        work_date: date,
        check_in: CheckEvent,
        status: AttendanceStatus,
    ) -> None:
        """Insert a new record. Raises DuplicateRecord if (user_id, work_date) exists."""

        raise NotImplementedError

    def update_checkin(self, *, attendance_id: str, check_in: CheckEvent, status: AttendanceStatus) -> bool:
        """Fill the check-in of a pre-created record (e.g. one marked absent)."""

        raise NotImplementedError

    def update_checkout(self, *, attendance_id: str, check_out: CheckEvent, work_hours: float) -> bool:
        raise NotImplementedError

    def list_records(
        self,
        *,
        user_id: Optional[str] = None,
        work_date: Optional[date] = None,
        month: Optional[int] = None,
        year: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Newest first. ``month`` filters only together with ``year``."""

        raise NotImplementedError
