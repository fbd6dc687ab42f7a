from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import parse_enum
from ..common.web import admin_required, current_session_user, json_body, login_required
from ..container import Container
from ..core.enums import StaffingRequestStatus
from .model import TemporaryStaffingRequest


def request_to_dict(r: TemporaryStaffingRequest) -> dict:
    return {
        "request_id": r.request_id,
        "site_id": r.site_id,
        "request_date": r.request_date.isoformat(),
        "day_temp_slots": r.day_temp_slots,
        "night_temp_slots": r.night_temp_slots,
        "day_slot_pay_rate": r.day_slot_pay_rate,
        "night_slot_pay_rate": r.night_slot_pay_rate,
        "notes": r.notes,
        "requested_by": r.requested_by,
        "status": r.status.value,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/staffing-requests", methods=["GET"], endpoint="staffing_requests_list")
    @login_required
    def staffing_requests_list():
        status_s = request.args.get("status")
        status = parse_enum(StaffingRequestStatus, status_s, "Status") if status_s else None
        rows = container.staffing_request_service.list_requests(status=status)
        return jsonify([request_to_dict(r) for r in rows])

    @app.route("/api/staffing-requests", methods=["POST"], endpoint="staffing_requests_create")
    @login_required
    def staffing_requests_create():
        user = current_session_user()
        row = container.staffing_request_service.create_request(
            current_role=user.role,
            requested_by=user.name or user.email,
            data=json_body(),
        )
        return jsonify(request_to_dict(row)), 201

    @app.route("/api/staffing-requests/<int:request_id>/status", methods=["POST"], endpoint="staffing_requests_status")
    @admin_required
    def staffing_requests_status(request_id: int):
        data = json_body()
        row = container.staffing_request_service.set_status(
            current_role=current_session_user().role,
            request_id=request_id,
            status=parse_enum(StaffingRequestStatus, data.get("status"), "Status"),
        )
        return jsonify(request_to_dict(row))
