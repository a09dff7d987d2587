from __future__ import annotations

from ..common.datetime_utils import format_hours
from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations.

    Each subclass maps to exactly one ``ErrorKind`` and carries a default
    user-facing message.
    """

    kind: ErrorKind = ErrorKind.VALIDATION
    default_message = "Permintaan tidak valid"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    kind = ErrorKind.AUTHENTICATION
    default_message = "Username atau password salah"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = ErrorKind.FORBIDDEN
    default_message = "Akses ditolak"


class Forbidden(AuthorizationError):
    """Non-admin actor attempting an admin-only operation."""


class ScheduleMissing(DomainError):
    kind = ErrorKind.SCHEDULE_MISSING
    default_message = "Jadwal kerja tidak ditemukan"

    def __init__(self, weekday: int, message: str | None = None):
        self.weekday = weekday
        super().__init__(message)


class AlreadyCheckedIn(DomainError):
    kind = ErrorKind.ALREADY_CHECKED_IN
    default_message = "Anda sudah melakukan check-in hari ini"


class AlreadyCheckedOut(DomainError):
    kind = ErrorKind.ALREADY_CHECKED_OUT
    default_message = "Anda sudah melakukan check-out hari ini"


class NotCheckedIn(DomainError):
    kind = ErrorKind.NOT_CHECKED_IN
    default_message = "Anda belum melakukan check-in hari ini"


class MinimumHoursNotMet(DomainError):
    """Worked hours are below the schedule minimum.

    ``remaining_hours``/``remaining_minutes`` is the deficit rounded up to
    whole minutes.
    """

    kind = ErrorKind.MINIMUM_HOURS_NOT_MET

    def __init__(
        self,
        *,
        required_hours: float,
        remaining_hours: int,
        remaining_minutes: int,
        lead: str | None = None,
    ):
        self.required_hours = required_hours
        self.remaining_hours = remaining_hours
        self.remaining_minutes = remaining_minutes
        lead = lead or f"Anda belum memenuhi jam kerja minimal ({format_hours(required_hours)} jam)"
        super().__init__(f"{lead}. Sisa waktu: {self.remaining_text}")

    @property
    def remaining_text(self) -> str:
        if self.remaining_hours > 0:
            return f"{self.remaining_hours} jam {self.remaining_minutes} menit"
        return f"{self.remaining_minutes} menit"


class ReasonRequired(DomainError):
    kind = ErrorKind.REASON_REQUIRED
    default_message = "Alasan lembur wajib diisi"


class CheckInRequired(DomainError):
    kind = ErrorKind.CHECK_IN_REQUIRED
    default_message = "Anda harus check-in terlebih dahulu"


class CheckOutRequired(DomainError):
    kind = ErrorKind.CHECK_OUT_REQUIRED
    default_message = "Anda harus check-out terlebih dahulu"


class OvertimeAlreadyOpen(DomainError):
    kind = ErrorKind.OVERTIME_ALREADY_OPEN
    default_message = "Anda sudah memiliki lembur yang sedang berjalan"


class NoOpenOvertime(DomainError):
    kind = ErrorKind.NO_OPEN_OVERTIME
    default_message = "Tidak ada lembur yang sedang berjalan"


class RecordNotFound(DomainError):
    kind = ErrorKind.RECORD_NOT_FOUND
    default_message = "Data tidak ditemukan"


class DuplicateRecord(DomainError):
    """Raised by repositories when a unique constraint rejects a write."""

    kind = ErrorKind.DUPLICATE_RECORD
    default_message = "Data sudah ada"
