from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import current_actor, error_response, login_required, optional_int, server_error
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/stats", methods=["GET"], endpoint="api_stats")
    @login_required
    def api_stats():
        try:
            stats = container.stats_service.stats(
                actor=current_actor(),
                user_id=request.args.get("userId") or None,
                month=optional_int(request.args.get("month")),
                year=optional_int(request.args.get("year")),
            )
            return jsonify({"success": True, "stats": stats.to_dict()})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Get stats failed")
            return server_error()
