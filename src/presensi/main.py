from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .common.datetime_utils import make_clock
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_LATE_GRACE_MINUTES, DEFAULT_SESSION_DAYS, DEFAULT_TIMEZONE
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .holidays.controller import register as register_holidays
from .overtime.controller import register as register_overtime
from .schedules.controller import register as register_schedules
from .stats.controller import register as register_stats
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Flask app factory.

    When ``container`` is given (tests), the database bootstrap is skipped and
    the supplied services are used as-is.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    session_days = int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))
    app.permanent_session_lifetime = timedelta(days=session_days)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config)
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            clock=make_clock(getattr(settings, "APP_TIMEZONE", DEFAULT_TIMEZONE)),
            late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES)),
        )

    register_users(app, container)
    register_attendance(app, container)
    register_overtime(app, container)
    register_schedules(app, container)
    register_holidays(app, container)
    register_stats(app, container)

    return app
