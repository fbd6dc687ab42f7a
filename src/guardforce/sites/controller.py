from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, current_session_user, json_body, login_required
from ..container import Container
from .model import Site


def site_to_dict(site: Site) -> dict:
    return {
        "site_id": site.site_id,
        "site_name": site.site_name,
        "organization_name": site.organization_name,
        "gst_number": site.gst_number,
        "gst_type": site.gst_type.value,
        "address": site.address,
        "address_line1": site.address_line1,
        "address_line2": site.address_line2,
        "address_line3": site.address_line3,
        "site_category": site.site_category,
        "personal_billing_name": site.personal_billing_name,
        "day_slots": site.day_slots,
        "night_slots": site.night_slots,
        "staffing_requirements": [
            {
                "requirement_id": r.requirement_id,
                "role_type": r.role_type,
                "budget_per_slot": r.budget_per_slot,
                "day_slots": r.day_slots,
                "night_slots": r.night_slots,
            }
            for r in site.staffing_requirements
        ],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sites", methods=["GET"], endpoint="sites_list")
    @login_required
    def sites_list():
        return jsonify([site_to_dict(s) for s in container.site_service.list_sites()])

    @app.route("/api/sites/<int:site_id>", methods=["GET"], endpoint="sites_get")
    @login_required
    def sites_get(site_id: int):
        return jsonify(site_to_dict(container.site_service.get_site(site_id)))

    @app.route("/api/sites", methods=["POST"], endpoint="sites_create")
    @admin_required
    def sites_create():
        site = container.site_service.create_site(current_role=current_session_user().role, data=json_body())
        return jsonify(site_to_dict(site)), 201

    @app.route("/api/sites/<int:site_id>", methods=["PUT"], endpoint="sites_update")
    @admin_required
    def sites_update(site_id: int):
        site = container.site_service.update_site(
            current_role=current_session_user().role,
            site_id=site_id,
            data=json_body(),
        )
        return jsonify(site_to_dict(site))

    @app.route("/api/sites/<int:site_id>", methods=["DELETE"], endpoint="sites_delete")
    @admin_required
    def sites_delete(site_id: int):
        container.site_service.delete_site(current_role=current_session_user().role, site_id=site_id)
        return "", 204
