from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import current_actor, error_response, json_body, login_required, optional_int, server_error
from ..core.exceptions import DomainError, ValidationError
from ..container import Container
from .model import Holiday

logger = logging.getLogger(__name__)


def _to_dict(h: Holiday) -> dict:
    return {"date": h.holiday_date.strftime("%Y-%m-%d"), "name": h.name}


def _parse_date(value) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError("Tanggal tidak valid (YYYY-MM-DD)")


def register(app: Flask, container: Container) -> None:
    def _ok(holidays, message: Optional[str] = None, status: int = 200):
        body = {"success": True, "holidays": [_to_dict(h) for h in holidays]}
        if message:
            body["message"] = message
        return jsonify(body), status

    @app.route("/api/holidays", methods=["GET"], endpoint="api_holidays_list")
    @login_required
    def api_holidays_list():
        try:
            return _ok(container.holiday_service.list(year=optional_int(request.args.get("year"))))
        except Exception:
            logger.exception("Get holidays failed")
            return server_error()

    @app.route("/api/holidays", methods=["POST"], endpoint="api_holidays_add")
    @login_required
    def api_holidays_add():
        data = json_body()
        try:
            holidays = container.holiday_service.add(
                actor=current_actor(),
                holiday_date=_parse_date(data.get("date")),
                name=data.get("name"),
            )
            return _ok(holidays, "Hari libur berhasil ditambahkan", 201)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Add holiday failed")
            return server_error()

    @app.route("/api/holidays", methods=["PUT"], endpoint="api_holidays_update")
    @login_required
    def api_holidays_update():
        data = json_body()
        try:
            holidays = container.holiday_service.update(
                actor=current_actor(),
                old_date=_parse_date(data.get("oldDate")),
                new_date=_parse_date(data.get("date")),
                name=data.get("name"),
            )
            return _ok(holidays, "Hari libur berhasil diupdate")
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Update holiday failed")
            return server_error()

    @app.route("/api/holidays", methods=["DELETE"], endpoint="api_holidays_remove")
    @login_required
    def api_holidays_remove():
        try:
            holidays = container.holiday_service.remove(
                actor=current_actor(),
                holiday_date=_parse_date(request.args.get("date")),
            )
            return _ok(holidays, "Hari libur berhasil dihapus")
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Delete holiday failed")
            return server_error()
