from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import admin_required, current_session_user, json_body, login_required
from ..container import Container
from .model import UtilityCharge


def charge_to_dict(c: UtilityCharge) -> dict:
    return {
        "charge_id": c.charge_id,
        "site_id": c.site_id,
        "description": c.description,
        "amount": c.amount,
        "is_active": c.is_active,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/utility-charges", methods=["GET"], endpoint="utility_charges_list")
    @login_required
    def utility_charges_list():
        site_id = request.args.get("site_id", type=int)
        charges = container.utility_charge_service.list_charges(site_id=site_id)
        return jsonify([charge_to_dict(c) for c in charges])

    @app.route("/api/sites/<int:site_id>/utility-charges", methods=["GET"], endpoint="utility_charges_for_site")
    @login_required
    def utility_charges_for_site(site_id: int):
        charges = container.utility_charge_service.list_charges(site_id=site_id)
        return jsonify([charge_to_dict(c) for c in charges])

    @app.route("/api/sites/<int:site_id>/utility-charges", methods=["POST"], endpoint="utility_charges_create")
    @admin_required
    def utility_charges_create(site_id: int):
        charge = container.utility_charge_service.create_charge(
            current_role=current_session_user().role,
            site_id=site_id,
            data=json_body(),
        )
        return jsonify(charge_to_dict(charge)), 201

    @app.route("/api/utility-charges/<int:charge_id>", methods=["PUT"], endpoint="utility_charges_update")
    @admin_required
    def utility_charges_update(charge_id: int):
        charge = container.utility_charge_service.update_charge(
            current_role=current_session_user().role,
            charge_id=charge_id,
            data=json_body(),
        )
        return jsonify(charge_to_dict(charge))

    @app.route("/api/utility-charges/<int:charge_id>", methods=["DELETE"], endpoint="utility_charges_delete")
    @admin_required
    def utility_charges_delete(charge_id: int):
        container.utility_charge_service.remove_charge(current_role=current_session_user().role, charge_id=charge_id)
        return "", 204
