from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.web import admin_required, current_session_user, json_body, login_required
from ..container import Container
from ..core.exceptions import AuthorizationError, ValidationError
from .model import User
from .service import SessionUser

logger = logging.getLogger(__name__)


def user_to_dict(user: User) -> dict:
    return {
        "user_id": user.user_id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "is_active": user.is_active,
    }


def session_user_to_dict(user: SessionUser) -> dict:
    return {"user_id": user.user_id, "name": user.name, "email": user.email, "role": user.role.value}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = user.user_id
        session["name"] = user.name
        session["email"] = user.email
        session["role"] = user.role.value
        return jsonify(session_user_to_dict(user))

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(session_user_to_dict(current_session_user()))

    @app.route("/api/admin/users", methods=["POST"], endpoint="admin_create_user")
    @admin_required
    def admin_create_user():
        try:
            data = json_body()
            user = container.user_service.create_account(
                current_role=current_session_user().role,
                name=data.get("name", ""),
                email=data.get("email", ""),
                password=data.get("password", ""),
                role=data.get("role", ""),
            )
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except AuthorizationError:
            raise
        except Exception as e:
            logger.exception("Failed to create user")
            return jsonify({"error": str(e) or "Internal server error"}), 500
        return jsonify({"success": True, "user": user_to_dict(user)})
