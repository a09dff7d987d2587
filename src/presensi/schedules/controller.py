from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.datetime_utils import format_hhmm
from ..common.web import current_actor, error_response, json_body, login_required, server_error
from ..core.exceptions import DomainError
from ..container import Container
from .model import WorkSchedule

logger = logging.getLogger(__name__)


def _to_dict(s: WorkSchedule) -> dict:
    return {
        "dayOfWeek": s.day_of_week,
        "startTime": format_hhmm(s.start_time),
        "endTime": format_hhmm(s.end_time),
        "minWorkHours": s.min_work_hours,
    }


def _as_day(value) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/schedules", methods=["GET"], endpoint="api_schedules_list")
    @login_required
    def api_schedules_list():
        try:
            schedules = container.schedule_service.list_active()
            return jsonify({"success": True, "schedules": [_to_dict(s) for s in schedules]})
        except Exception:
            logger.exception("Get schedules failed")
            return server_error()

    @app.route("/api/schedules", methods=["PUT"], endpoint="api_schedules_update")
    @login_required
    def api_schedules_update():
        data = json_body()
        try:
            schedules = container.schedule_service.update(
                actor=current_actor(),
                day_of_week=_as_day(data.get("dayOfWeek")),
                start_time=data.get("startTime") or None,
                end_time=data.get("endTime") or None,
                min_work_hours=data.get("minWorkHours"),
            )
            return jsonify(
                {
                    "success": True,
                    "schedules": [_to_dict(s) for s in schedules],
                    "message": "Jadwal berhasil diupdate",
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Update schedule failed")
            return server_error()
