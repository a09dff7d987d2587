"""Helpers shared by the Flask controllers (session actor, JSON errors)."""

from __future__ import annotations

from functools import wraps
from typing import Any, Optional

from flask import jsonify, request, session

from ..core.enums import ErrorKind, Role
from ..core.exceptions import DomainError
from ..users.model import Actor

_STATUS_BY_KIND = {
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.RECORD_NOT_FOUND: 404,
}


def current_actor() -> Optional[Actor]:
    user_id = session.get("user_id")
    role = session.get("role")
    if not user_id or not role:
        return None
    try:
        return Actor(user_id=str(user_id), role=Role(role))
    except ValueError:
        return None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_actor() is None:
            return jsonify({"error": "Tidak terautentikasi"}), 401
        return view(*args, **kwargs)

    return wrapper


def error_response(e: DomainError):
    body: dict[str, Any] = {"error": e.message, "kind": e.kind.value}
    remaining = getattr(e, "remaining_minutes", None)
    if remaining is not None:
        body["remaining"] = {"hours": e.remaining_hours, "minutes": remaining}
    return jsonify(body), _STATUS_BY_KIND.get(e.kind, 400)


def server_error():
    return jsonify({"error": "Terjadi kesalahan server"}), 500


def json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def optional_int(value: Optional[str]) -> Optional[int]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return int(v)
    except ValueError:
        return None
