from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_admin
from ..core.exceptions import DuplicateRecord, RecordNotFound, ValidationError
from ..users.model import Actor
from .model import Holiday
from .repository import HolidayRepository

logger = logging.getLogger(__name__)

_DUPLICATE_MESSAGE = "Tanggal libur sudah ada"
_NOT_FOUND_MESSAGE = "Hari libur tidak ditemukan"


class HolidayService:
    """Holiday calendar. Display only: attendance rules do not consult it."""

    def __init__(self, holidays: HolidayRepository):
        self._holidays = holidays

    def get(self, holiday_date: date) -> Optional[Holiday]:
        return self._holidays.get(holiday_date)

    def list(self, *, year: Optional[int] = None) -> Sequence[Holiday]:
        return sorted(self._holidays.list(year=year), key=lambda h: h.holiday_date)

    def add(self, *, actor: Actor, holiday_date: Optional[date], name: Optional[str]) -> Sequence[Holiday]:
        require_admin(actor)

        name = (name or "").strip()
        if holiday_date is None or not name:
            raise ValidationError("Tanggal dan nama hari libur wajib diisi")

        if self._holidays.get(holiday_date):
            raise DuplicateRecord(_DUPLICATE_MESSAGE)

        try:
            self._holidays.add(holiday_date=holiday_date, name=name)
        except DuplicateRecord:
            raise DuplicateRecord(_DUPLICATE_MESSAGE)

        logger.info("Holiday %s (%s) added by %s", holiday_date, name, actor.user_id)
        return self.list()

    def update(
        self,
        *,
        actor: Actor,
        old_date: Optional[date],
        new_date: Optional[date] = None,
        name: Optional[str] = None,
    ) -> Sequence[Holiday]:
        require_admin(actor)

        if old_date is None:
            raise ValidationError("Tanggal lama wajib diisi")

        name = (name or "").strip() or None
        if new_date is None and name is None:
            raise ValidationError("Tidak ada data yang diupdate")

        if self._holidays.get(old_date) is None:
            raise RecordNotFound(_NOT_FOUND_MESSAGE)

        if new_date is not None and new_date != old_date and self._holidays.get(new_date):
            raise DuplicateRecord(_DUPLICATE_MESSAGE)

        try:
            ok = self._holidays.update(old_date=old_date, new_date=new_date, name=name)
        except DuplicateRecord:
            raise DuplicateRecord(_DUPLICATE_MESSAGE)
        if not ok:
            raise RecordNotFound(_NOT_FOUND_MESSAGE)

        logger.info("Holiday %s updated by %s", old_date, actor.user_id)
        return self.list()

    def remove(self, *, actor: Actor, holiday_date: Optional[date]) -> Sequence[Holiday]:
        require_admin(actor)

        if holiday_date is None:
            raise ValidationError("Tanggal wajib diisi")

        if not self._holidays.remove(holiday_date):
            raise RecordNotFound(_NOT_FOUND_MESSAGE)

        logger.info("Holiday %s removed by %s", holiday_date, actor.user_id)
        return self.list()
