from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_session_user, json_body
from ..container import Container
from .model import PaymentRecord


def payment_to_dict(p: PaymentRecord) -> dict:
    return {
        "payment_id": p.payment_id,
        "guard_id": p.guard_id,
        "payment_date": p.payment_date.isoformat(),
        "amount": p.amount,
        "payment_type": p.payment_type.value,
        "month": p.month,
        "note": p.note,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payments", methods=["GET"], endpoint="payments_list")
    @admin_required
    def payments_list():
        rows = container.payment_service.list_payments(
            current_role=current_session_user().role,
            guard_id=request.args.get("guard_id", type=int),
            month=request.args.get("month"),
        )
        return jsonify([payment_to_dict(p) for p in rows])

    @app.route("/api/guards/<int:guard_id>/payments", methods=["GET"], endpoint="payments_for_guard")
    @admin_required
    def payments_for_guard(guard_id: int):
        rows = container.payment_service.list_payments(current_role=current_session_user().role, guard_id=guard_id)
        return jsonify([payment_to_dict(p) for p in rows])

    @app.route("/api/payments", methods=["POST"], endpoint="payments_create")
    @admin_required
    def payments_create():
        payment = container.payment_service.create_payment(current_role=current_session_user().role, data=json_body())
        return jsonify(payment_to_dict(payment)), 201

    @app.route("/api/payments/<int:payment_id>", methods=["PUT"], endpoint="payments_update")
    @admin_required
    def payments_update(payment_id: int):
        payment = container.payment_service.update_payment(
            current_role=current_session_user().role,
            payment_id=payment_id,
            data=json_body(),
        )
        return jsonify(payment_to_dict(payment))

    @app.route("/api/payments/<int:payment_id>", methods=["DELETE"], endpoint="payments_delete")
    @admin_required
    def payments_delete(payment_id: int):
        container.payment_service.delete_payment(current_role=current_session_user().role, payment_id=payment_id)
        return "", 204
