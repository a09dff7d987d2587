from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional, Protocol, Sequence

from ..core.enums import OvertimeStatus
from .model import OvertimeRecord


class OvertimeRepository(Protocol):
    def get_by_id(self, overtime_id: str) -> Optional[OvertimeRecord]:
        raise NotImplementedError

    def get_open_for_user_and_date(self, user_id: str, work_date: date) -> Optional[OvertimeRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        overtime_id: str,
        user_id: str,
        work_date: date,
        start_time: time,
        reason: str,
    ) -> None:
        """Insert a pending, open record.

        Raises DuplicateRecord if the user already has an open record that day.
        """

        raise NotImplementedError

    def close(self, *, overtime_id: str, end_time: time, duration: float) -> bool:
        raise NotImplementedError

    def decide(
        self,
        *,
        overtime_id: str,
        status: OvertimeStatus,
        approved_by: str,
        approved_at: datetime,
    ) -> bool:
        raise NotImplementedError

    def list_records(
        self,
        *,
        user_id: Optional[str] = None,
        status: Optional[OvertimeStatus] = None,
    ) -> Sequence[OvertimeRecord]:
        raise NotImplementedError
