from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import parse_enum
from ..common.web import admin_required, current_session_user, json_body, login_required
from ..container import Container
from ..core.enums import GuardStatus
from .model import Guard


def guard_to_dict(guard: Guard) -> dict:
    return {
        "guard_id": guard.guard_id,
        "name": guard.name,
        "badge_number": guard.badge_number,
        "email": guard.email,
        "phone": guard.phone,
        "status": guard.status.value,
        "guard_type": guard.guard_type.value,
        "pay_rate": guard.pay_rate,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/guards", methods=["GET"], endpoint="guards_list")
    @login_required
    def guards_list():
        status_s = request.args.get("status")
        status = parse_enum(GuardStatus, status_s, "Status") if status_s else None
        return jsonify([guard_to_dict(g) for g in container.guard_service.list_guards(status=status)])

    @app.route("/api/guards/<int:guard_id>", methods=["GET"], endpoint="guards_get")
    @login_required
    def guards_get(guard_id: int):
        return jsonify(guard_to_dict(container.guard_service.get_guard(guard_id)))

    @app.route("/api/guards", methods=["POST"], endpoint="guards_create")
    @admin_required
    def guards_create():
        guard = container.guard_service.create_guard(current_role=current_session_user().role, data=json_body())
        return jsonify(guard_to_dict(guard)), 201

    @app.route("/api/guards/<int:guard_id>", methods=["PUT"], endpoint="guards_update")
    @admin_required
    def guards_update(guard_id: int):
        guard = container.guard_service.update_guard(
            current_role=current_session_user().role,
            guard_id=guard_id,
            data=json_body(),
        )
        return jsonify(guard_to_dict(guard))

    @app.route("/api/guards/<int:guard_id>", methods=["DELETE"], endpoint="guards_delete")
    @admin_required
    def guards_delete(guard_id: int):
        container.guard_service.delete_guard(current_role=current_session_user().role, guard_id=guard_id)
        return "", 204
