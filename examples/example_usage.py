"""Example: call the service layer directly (no Flask).

Controllers are thin; the rules live in the services wired by the container.
"""

import importlib

from dotenv import load_dotenv

from presensi.common.datetime_utils import make_clock
from presensi.config import get_settings_module
from presensi.container import build_container
from presensi.core.enums import Role
from presensi.users.model import Actor


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, clock=make_clock(settings.APP_TIMEZONE))

    actor = Actor(user_id="emp-001", role=Role.EMPLOYEE)
    print(container.attendance_service.get_today_record("emp-001"))
    print(container.stats_service.stats(actor=actor).to_dict())


if __name__ == "__main__":
    main()
