from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify

from ..common.web import admin_required, current_session_user, json_body, login_required
from ..container import Container
from .model import CompanySettings


def settings_to_dict(settings: CompanySettings) -> dict:
    data = asdict(settings)
    data["personal_billing_names"] = list(settings.personal_billing_names)
    return data


def register(app: Flask, container: Container) -> None:
    @app.route("/api/company", methods=["GET"], endpoint="company_get")
    @login_required
    def company_get():
        return jsonify(settings_to_dict(container.company_service.get_settings()))

    @app.route("/api/company", methods=["PUT"], endpoint="company_update")
    @admin_required
    def company_update():
        settings = container.company_service.update_settings(
            current_role=current_session_user().role,
            data=json_body(),
        )
        return jsonify(settings_to_dict(settings))
