from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_optional_date, today_local
from ..common.validators import parse_enum, parse_flag
from ..common.web import current_session_user, json_body, login_required
from ..container import Container
from ..core.enums import ShiftType
from ..core.exceptions import ValidationError
from .model import Shift
from .service import AllocationResult, SiteShiftSummary, parse_temporary_slots


def shift_to_dict(shift: Shift) -> dict:
    return {
        "shift_id": shift.shift_id,
        "site_id": shift.site_id,
        "shift_type": shift.shift_type.value,
        "guard_id": shift.guard_id,
        "is_temporary": shift.is_temporary,
        "role_type": shift.role_type,
        "temporary_pay_rate": shift.temporary_pay_rate,
        "created_for_date": shift.created_for_date.isoformat() if shift.created_for_date else None,
    }


def summary_to_dict(summary: SiteShiftSummary) -> dict:
    return {
        "site_id": summary.site_id,
        "day_shifts": summary.day_shifts,
        "night_shifts": summary.night_shifts,
        "day_filled": summary.day_filled,
        "night_filled": summary.night_filled,
        "day_slots": summary.day_slots,
        "night_slots": summary.night_slots,
        "day_fill_percent": summary.day_fill_percent,
        "night_fill_percent": summary.night_fill_percent,
    }


def allocation_to_dict(result: AllocationResult) -> dict:
    return {
        "site_id": result.site_id,
        "shift_type": result.shift_type.value,
        "date": result.on_date.isoformat(),
        "needs_confirmation": result.needs_confirmation,
        "conflicts": [
            {"attendance_id": c.attendance_id, "guard_id": c.guard_id, "status": c.status}
            for c in result.conflicts
        ],
        "added": result.added,
        "removed": result.removed,
        "deleted_attendance_ids": result.deleted_attendance_ids,
        "failures": [{"action": f.action, "ref": f.ref, "error": f.error} for f in result.failures],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/sites/<int:site_id>/summary", methods=["GET"], endpoint="shifts_site_summary")
    @login_required
    def shifts_site_summary(site_id: int):
        return jsonify(summary_to_dict(container.shift_allocation_service.site_summary(site_id)))

    @app.route("/api/sites/<int:site_id>/shifts", methods=["GET"], endpoint="shifts_for_site")
    @login_required
    def shifts_for_site(site_id: int):
        on_date = parse_optional_date(request.args.get("date"), today_local())
        shifts = container.shift_allocation_service.shifts_for_date(site_id, on_date)
        return jsonify([shift_to_dict(s) for s in shifts])

    @app.route("/api/sites/<int:site_id>/allocation", methods=["POST"], endpoint="shifts_allocate")
    @login_required
    def shifts_allocate(site_id: int):
        data = json_body()
        guard_ids = data.get("guard_ids")
        if not isinstance(guard_ids, list):
            raise ValidationError("guard_ids must be a list")
        try:
            guard_ids = [int(g) for g in guard_ids]
        except (TypeError, ValueError, OverflowError):
            raise ValidationError("guard_ids must contain guard ids")

        result = container.shift_allocation_service.allocate(
            current_role=current_session_user().role,
            site_id=site_id,
            shift_type=parse_enum(ShiftType, data.get("shift_type"), "Shift type"),
            guard_ids=guard_ids,
            confirm=parse_flag(data.get("confirm"), "confirm"),
            on_date=parse_optional_date(data.get("date"), today_local()),
        )
        if result.needs_confirmation:
            return jsonify(allocation_to_dict(result)), 409
        return jsonify(allocation_to_dict(result))

    @app.route("/api/shifts/reassign", methods=["POST"], endpoint="shifts_reassign")
    @login_required
    def shifts_reassign():
        data = json_body()
        try:
            from_id = int(data.get("from_shift_id"))
            to_id = int(data.get("to_shift_id"))
        except (TypeError, ValueError, OverflowError):
            raise ValidationError("from_shift_id and to_shift_id are required")

        shift = container.shift_allocation_service.reassign(
            current_role=current_session_user().role,
            from_shift_id=from_id,
            to_shift_id=to_id,
        )
        return jsonify(shift_to_dict(shift))

    @app.route("/api/sites/<int:site_id>/temporary-slots", methods=["POST"], endpoint="shifts_temporary_add")
    @login_required
    def shifts_temporary_add(site_id: int):
        data = json_body()
        created = container.temporary_slot_service.add_slots(
            current_role=current_session_user().role,
            site_id=site_id,
            on_date=parse_iso_date(data.get("date")),
            slots=parse_temporary_slots(data.get("slots") or []),
        )
        return jsonify({"created": created}), 201

    @app.route("/api/sites/<int:site_id>/temporary-slots/copy", methods=["POST"], endpoint="shifts_temporary_copy")
    @login_required
    def shifts_temporary_copy(site_id: int):
        data = json_body()
        copied = container.temporary_slot_service.copy_slots(
            current_role=current_session_user().role,
            site_id=site_id,
            from_date=parse_iso_date(data.get("from_date")),
            to_date=parse_iso_date(data.get("to_date")),
        )
        return jsonify({"copied": copied})
