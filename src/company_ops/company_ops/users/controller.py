from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.auth import login_required
from ..common.http import error_response, read_json
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = read_json()
        try:
            s_user = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Login failed")
            return jsonify({"error": "Failed to log in"}), 500

        session.clear()
        session.permanent = bool(body.get("remember"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        session["employee_id"] = s_user.employee_id
        session["intern_id"] = s_user.intern_id
        return jsonify(s_user.to_dict())

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/api/auth/me", endpoint="me")
    @login_required
    def me():
        try:
            return jsonify(container.auth_service.get_session_user(int(session["user_id"])).to_dict())
        except DomainError as e:
            return error_response(e)

    @app.route("/api/auth/change-password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        body = read_json()
        try:
            container.auth_service.change_password(
                int(session["user_id"]),
                current_password=body.get("currentPassword", ""),
                new_password=body.get("newPassword", ""),
            )
            return jsonify({"message": "Password updated"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Password change failed")
            return jsonify({"error": "Failed to change password"}), 500
