from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, now_local
from .core.constants import DEFAULT_LATE_GRACE_MINUTES, DEFAULT_MIN_WORK_HOURS
from .database.connection import DatabaseConnection, DBConfig
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .overtime.mysql_overtime_repository import MySQLOvertimeRepository
from .overtime.repository import OvertimeRepository
from .overtime.service import OvertimeService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .stats.service import StatsService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    clock: Clock

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    overtime_repo: OvertimeRepository
    schedules_repo: ScheduleRepository
    holidays_repo: HolidayRepository

    auth_service: AuthService
    user_service: UserService
    schedule_service: ScheduleService
    holiday_service: HolidayService
    attendance_service: AttendanceService
    overtime_service: OvertimeService
    stats_service: StatsService


def assemble(
    *,
    users: UserRepository,
    attendance: AttendanceRepository,
    overtime: OvertimeRepository,
    schedules: ScheduleRepository,
    holidays: HolidayRepository,
    clock: Optional[Clock] = None,
    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    default_min_work_hours: float = DEFAULT_MIN_WORK_HOURS,
) -> Container:
    """Wire services over any set of repositories (MySQL or in-memory)."""

    clock = clock or now_local
    schedule_service = ScheduleService(schedules)

    return Container(
        clock=clock,
        users_repo=users,
        attendance_repo=attendance,
        overtime_repo=overtime,
        schedules_repo=schedules,
        holidays_repo=holidays,
        auth_service=AuthService(users),
        user_service=UserService(users),
        schedule_service=schedule_service,
        holiday_service=HolidayService(holidays),
        attendance_service=AttendanceService(
            attendance,
            schedule_service,
            strategy_factory=AttendanceStrategyFactory(grace_minutes=late_grace_minutes),
            clock=clock,
        ),
        overtime_service=OvertimeService(
            overtime,
            attendance,
            schedule_service,
            clock=clock,
            default_min_work_hours=default_min_work_hours,
        ),
        stats_service=StatsService(attendance, clock=clock),
    )


def build_container(
    *,
    db_config: dict,
    clock: Optional[Clock] = None,
    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return assemble(
        users=MySQLUserRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        overtime=MySQLOvertimeRepository(conn),
        schedules=MySQLScheduleRepository(conn),
        holidays=MySQLHolidayRepository(conn),
        clock=clock,
        late_grace_minutes=late_grace_minutes,
    )
