from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_actor, error_response, json_body, login_required, optional_int, server_error
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .model import GeoLocation

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_list")
    @login_required
    def api_attendance_list():
        actor = current_actor()
        try:
            date_s = request.args.get("date")
            try:
                work_date = parse_iso_date(date_s) if date_s else None
            except ValueError:
                raise ValidationError("Tanggal tidak valid (YYYY-MM-DD)")

            records = container.attendance_service.list_records(
                actor=actor,
                user_id=request.args.get("userId") or None,
                work_date=work_date,
                month=optional_int(request.args.get("month")),
                year=optional_int(request.args.get("year")),
            )
            return jsonify({"success": True, "records": [r.to_dict() for r in records]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Get attendance failed")
            return server_error()

    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_action")
    @login_required
    def api_attendance_action():
        actor = current_actor()
        data = json_body()
        action = data.get("action")
        try:
            location = GeoLocation.from_dict(data.get("location"))
        except (TypeError, ValueError):
            return jsonify({"error": "Lokasi tidak valid"}), 400
        photo = str(data.get("photo") or "")

        try:
            if action == "check-in":
                result = container.attendance_service.check_in(actor.user_id, photo=photo, location=location)
                return jsonify({"success": True, "record": result.record.to_dict(), "message": result.message})

            if action == "check-out":
                record = container.attendance_service.check_out(actor.user_id, photo=photo, location=location)
                return jsonify({"success": True, "record": record.to_dict(), "message": "Check-out berhasil"})

            return jsonify({"error": "Action tidak valid"}), 400
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Attendance action %s failed", action)
            return server_error()
