from __future__ import annotations

from flask import Flask, current_app, jsonify, request

from ..common.datetime_utils import format_month, parse_month, parse_optional_date, today_local
from ..common.web import current_session_user, json_body, login_required
from ..container import Container
from ..core.constants import DEFAULT_ATTENDANCE_POLL_SECONDS
from .model import AttendanceRecord
from .monthly import GuardMonthlySummary
from .overview import SiteOverview


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "attendance_id": r.attendance_id,
        "attendance_date": r.attendance_date.isoformat(),
        "site_id": r.site_id,
        "shift_id": r.shift_id,
        "shift_type": r.shift_type.value,
        "guard_id": r.guard_id,
        "status": r.status.value,
        "replacement_guard_id": r.replacement_guard_id,
        "reassigned_site_id": r.reassigned_site_id,
        "notes": r.notes,
    }


def overview_to_dict(o: SiteOverview) -> dict:
    return {
        "site_id": o.site_id,
        "site_name": o.site_name,
        "address": o.address,
        "day_slots": o.day_slots,
        "night_slots": o.night_slots,
        "day_assigned": o.day_assigned,
        "night_assigned": o.night_assigned,
        "day_present": o.day_present,
        "night_present": o.night_present,
        "status": o.status.value,
    }


def monthly_to_dict(s: GuardMonthlySummary) -> dict:
    return {
        "guard_id": s.guard_id,
        "guard_name": s.guard_name,
        "month": format_month(s.year, s.month),
        "day_shifts": s.day_shifts,
        "night_shifts": s.night_shifts,
        "total_shifts": s.total_shifts,
        "absent_days": s.absent_days,
        "total_records": s.total_records,
        "attendance_rate": s.attendance_rate,
    }

def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        on_date = parse_optional_date(request.args.get("date"), today_local())
        site_id = request.args.get("site_id", type=int)
        records = container.attendance_service.list_for_date(on_date, site_id=site_id)
        return jsonify([record_to_dict(r) for r in records])

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def attendance_mark():
        record = container.attendance_service.mark(current_role=current_session_user().role, data=json_body())
        return jsonify(record_to_dict(record)), 201

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    @login_required
    def attendance_delete(attendance_id: int):
        container.attendance_service.delete(current_role=current_session_user().role, attendance_id=attendance_id)
        return "", 204

    @app.route("/api/attendance/overview", methods=["GET"], endpoint="attendance_overview")
    @login_required
    def attendance_overview():
        on_date = parse_optional_date(request.args.get("date"), today_local())
        rows = container.attendance_overview_service.get_overview(on_date)
        return jsonify({"date": on_date.isoformat(), "sites": [overview_to_dict(o) for o in rows]})

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        today = today_local()
        records = container.attendance_service.list_for_date(today)
        return jsonify(
            {
                "date": today.isoformat(),
                "poll_seconds": current_app.config.get("ATTENDANCE_POLL_SECONDS", DEFAULT_ATTENDANCE_POLL_SECONDS),
                "records": [record_to_dict(r) for r in records],
            }
        )

    @app.route("/api/attendance/monthly", methods=["GET"], endpoint="attendance_monthly")
    @login_required
    def attendance_monthly():
        year, month = _month_arg()
        rows = container.guard_monthly_summary_service.for_all_guards(year=year, month=month)
        return jsonify([monthly_to_dict(s) for s in rows])

    @app.route("/api/guards/<int:guard_id>/monthly", methods=["GET"], endpoint="attendance_guard_monthly")
    @login_required
    def attendance_guard_monthly(guard_id: int):
        year, month = _month_arg()
        summary = container.guard_monthly_summary_service.for_guard(guard_id, year=year, month=month)
        return jsonify(monthly_to_dict(summary))


def _month_arg() -> tuple[int, int]:
    value = request.args.get("month")
    if not value:
        today = today_local()
        return today.year, today.month
    return parse_month(value)
