from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Holiday


class HolidayRepository(Protocol):
    def get(self, holiday_date: date) -> Optional[Holiday]:
        raise NotImplementedError

    def list(self, *, year: Optional[int] = None) -> Sequence[Holiday]:
        raise NotImplementedError

    def add(self, *, holiday_date: date, name: str) -> None:
        """Insert a holiday. Raises DuplicateRecord if the date exists."""

        raise NotImplementedError

    def update(self, *, old_date: date, new_date: Optional[date] = None, name: Optional[str] = None) -> bool:
        raise NotImplementedError

    def remove(self, holiday_date: date) -> bool:
        raise NotImplementedError
