from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Actor role used for access checks."""

    EMPLOYEE = "employee"
    ADMIN = "admin"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"
    # Kept for storage compatibility; no code path assigns it.
    HOLIDAY = "holiday"


class OvertimeStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ErrorKind(str, Enum):
    """Machine-readable failure kinds carried by domain exceptions."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    FORBIDDEN = "forbidden"
    SCHEDULE_MISSING = "schedule_missing"
    ALREADY_CHECKED_IN = "already_checked_in"
    ALREADY_CHECKED_OUT = "already_checked_out"
    NOT_CHECKED_IN = "not_checked_in"
    MINIMUM_HOURS_NOT_MET = "minimum_hours_not_met"
    REASON_REQUIRED = "reason_required"
    CHECK_IN_REQUIRED = "check_in_required"
    CHECK_OUT_REQUIRED = "check_out_required"
    OVERTIME_ALREADY_OPEN = "overtime_already_open"
    NO_OPEN_OVERTIME = "no_open_overtime"
    RECORD_NOT_FOUND = "record_not_found"
    DUPLICATE_RECORD = "duplicate_record"
