from datetime import date

import pytest

from presensi.core.exceptions import DuplicateRecord, Forbidden, RecordNotFound, ValidationError
from presensi.holidays.service import HolidayService


@pytest.fixture
def service(holidays_repo):
    return HolidayService(holidays_repo)


def test_list_sorted_and_filtered_by_year(service, holidays_repo):
    holidays_repo.add(holiday_date=date(2025, 12, 25), name="Natal")

    assert [h.holiday_date for h in service.list()] == [date(2025, 12, 25), date(2026, 1, 1), date(2026, 12, 25)]
    assert len(service.list(year=2026)) == 2


def test_add_holiday(service, admin):
    holidays = service.add(actor=admin, holiday_date=date(2026, 8, 17), name=" Hari Kemerdekaan ")

    assert service.get(date(2026, 8, 17)).name == "Hari Kemerdekaan"
    assert len(holidays) == 3


def test_add_requires_admin(service, employee):
    with pytest.raises(Forbidden):
        service.add(actor=employee, holiday_date=date(2026, 8, 17), name="Hari Kemerdekaan")


def test_add_requires_date_and_name(service, admin):
    with pytest.raises(ValidationError):
        service.add(actor=admin, holiday_date=date(2026, 8, 17), name="  ")


def test_add_duplicate_date(service, admin):
    with pytest.raises(DuplicateRecord) as exc:
        service.add(actor=admin, holiday_date=date(2026, 1, 1), name="Lagi")

    assert exc.value.message == "Tanggal libur sudah ada"


def test_update_renames_and_moves(service, admin):
    service.update(actor=admin, old_date=date(2026, 1, 1), new_date=date(2026, 1, 2), name="Cuti Bersama")

    assert service.get(date(2026, 1, 1)) is None
    assert service.get(date(2026, 1, 2)).name == "Cuti Bersama"


def test_update_onto_existing_date(service, admin):
    with pytest.raises(DuplicateRecord):
        service.update(actor=admin, old_date=date(2026, 1, 1), new_date=date(2026, 12, 25))


def test_update_missing(service, admin):
    with pytest.raises(RecordNotFound):
        service.update(actor=admin, old_date=date(2026, 3, 3), name="X")


def test_remove(service, admin):
    service.remove(actor=admin, holiday_date=date(2026, 1, 1))

    assert service.get(date(2026, 1, 1)) is None
    with pytest.raises(RecordNotFound):
        service.remove(actor=admin, holiday_date=date(2026, 1, 1))
