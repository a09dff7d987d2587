from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.web import current_actor, error_response, json_body, login_required, server_error
from ..core.exceptions import DomainError
from ..container import Container
from .service import to_profile

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def api_health():
        return jsonify({"success": True, "status": "ok"})

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = json_body()
        try:
            s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

            session.clear()
            session.permanent = bool(data.get("remember"))

            session["user_id"] = s_user.user_id
            session["name"] = s_user.name
            session["role"] = s_user.role.value

            return jsonify({"success": True, "user": container.auth_service.get_profile(s_user.user_id)})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Login failed")
            return server_error()

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def api_logout():
        session.clear()
        return jsonify({"success": True, "message": "Logout berhasil"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="api_me")
    @login_required
    def api_me():
        try:
            return jsonify({"success": True, "user": container.auth_service.get_profile(current_actor().user_id)})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Get current user failed")
            return server_error()

    @app.route("/api/users", methods=["GET"], endpoint="api_users_list")
    @login_required
    def api_users_list():
        try:
            users = container.user_service.list(actor=current_actor())
            return jsonify({"success": True, "users": [to_profile(u) for u in users]})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Get users failed")
            return server_error()

    @app.route("/api/users", methods=["POST"], endpoint="api_users_create")
    @login_required
    def api_users_create():
        data = json_body()
        try:
            user = container.user_service.create(
                actor=current_actor(),
                username=data.get("username"),
                password=data.get("password"),
                name=data.get("name"),
                role=data.get("role"),
                department=data.get("department"),
                position=data.get("position"),
                email=data.get("email"),
                phone=data.get("phone"),
            )
            return jsonify({"success": True, "user": to_profile(user)}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Create user failed")
            return server_error()

    @app.route("/api/users/<user_id>", methods=["GET"], endpoint="api_users_get")
    @login_required
    def api_users_get(user_id: str):
        try:
            user = container.user_service.get(actor=current_actor(), user_id=user_id)
            return jsonify({"success": True, "user": to_profile(user)})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Get user failed")
            return server_error()

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="api_users_update")
    @login_required
    def api_users_update(user_id: str):
        try:
            user = container.user_service.update(actor=current_actor(), user_id=user_id, data=json_body())
            return jsonify({"success": True, "user": to_profile(user)})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Update user failed")
            return server_error()

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="api_users_delete")
    @login_required
    def api_users_delete(user_id: str):
        try:
            container.user_service.deactivate(actor=current_actor(), user_id=user_id)
            return jsonify({"success": True, "message": "User berhasil dihapus"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Delete user failed")
            return server_error()
