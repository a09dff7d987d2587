from datetime import time

from presensi.attendance.calculator.same_day_calculator import SameDayCalculator
from presensi.attendance.factory import AttendanceStrategyFactory
from presensi.attendance.strategies.late_strategy import LateStrategy
from presensi.attendance.strategies.present_strategy import PresentStrategy
from presensi.schedules.model import WorkSchedule

SCHEDULE = WorkSchedule(day_of_week=1, start_time=time(8, 0), end_time=time(16, 0), min_work_hours=8.0)


def test_factory_checkin_at_start_is_present():
    strategy = AttendanceStrategyFactory().for_checkin(check_in_time=time(8, 0), schedule=SCHEDULE)

    assert isinstance(strategy, PresentStrategy)


def test_factory_checkin_one_minute_after_start_is_late():
    strategy = AttendanceStrategyFactory().for_checkin(check_in_time=time(8, 1), schedule=SCHEDULE)

    assert isinstance(strategy, LateStrategy)


def test_factory_grace_minutes_extend_on_time_window():
    factory = AttendanceStrategyFactory(grace_minutes=5)

    assert isinstance(factory.for_checkin(check_in_time=time(8, 5), schedule=SCHEDULE), PresentStrategy)
    assert isinstance(factory.for_checkin(check_in_time=time(8, 6), schedule=SCHEDULE), LateStrategy)


def test_same_day_calculator_goes_negative_across_midnight():
    calc = SameDayCalculator()

    assert calc.worked_minutes(time(8, 0), time(16, 30)) == 510
    assert calc.worked_minutes(time(22, 0), time(1, 0)) == -1260
