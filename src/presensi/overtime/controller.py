from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import current_actor, error_response, json_body, login_required, server_error
from ..core.enums import OvertimeStatus
from ..core.exceptions import DomainError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/overtime", methods=["GET"], endpoint="api_overtime_list")
    @login_required
    def api_overtime_list():
        actor = current_actor()
        try:
            status_s = request.args.get("status")
            try:
                status = OvertimeStatus(status_s) if status_s else None
            except ValueError:
                raise ValidationError("Status tidak valid")

            records = container.overtime_service.list_records(
                actor=actor,
                user_id=request.args.get("userId") or None,
                status=status,
            )
            return jsonify({"success": True, "records": [r.to_dict() for r in records]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Get overtime failed")
            return server_error()

    @app.route("/api/overtime", methods=["POST"], endpoint="api_overtime_start")
    @login_required
    def api_overtime_start():
        actor = current_actor()
        data = json_body()
        try:
            record = container.overtime_service.start(actor.user_id, data.get("reason"))
            return jsonify({"success": True, "record": record.to_dict(), "message": "Lembur dimulai"}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Start overtime failed")
            return server_error()

    @app.route("/api/overtime", methods=["PUT"], endpoint="api_overtime_action")
    @login_required
    def api_overtime_action():
        actor = current_actor()
        data = json_body()
        action = data.get("action")
        try:
            if action == "end":
                record = container.overtime_service.end(actor.user_id)
                return jsonify({"success": True, "record": record.to_dict(), "message": "Lembur selesai"})

            if action in {"approve", "reject"}:
                if actor.is_admin and not data.get("overtimeId"):
                    raise ValidationError("ID lembur wajib diisi")
                approve = action == "approve"
                record = container.overtime_service.decide(
                    actor=actor,
                    overtime_id=data.get("overtimeId"),
                    approve=approve,
                )
                message = "Lembur disetujui" if approve else "Lembur ditolak"
                return jsonify({"success": True, "record": record.to_dict(), "message": message})

            return jsonify({"error": "Action tidak valid"}), 400
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Overtime action %s failed", action)
            return server_error()
