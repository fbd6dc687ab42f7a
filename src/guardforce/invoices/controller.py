from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, parse_optional_date, today_local
from ..common.validators import optional_text, parse_enum
from ..common.web import admin_required, current_session_user, json_body
from ..container import Container
from ..core.enums import InvoiceStatus
from ..core.exceptions import ValidationError
from .model import AutoGenerateResult, Invoice


def invoice_to_dict(inv: Invoice) -> dict:
    tax = inv.tax
    return {
        "invoice_id": inv.invoice_id,
        "invoice_number": inv.invoice_number,
        "site_id": inv.site_id,
        "site_name": inv.site_name,
        "site_gst": inv.site_gst,
        "company_name": inv.company_name,
        "company_gst": inv.company_gst,
        "client_name": inv.client_name,
        "client_address": inv.client_address,
        "invoice_date": inv.invoice_date.isoformat(),
        "period_from": inv.period_from.isoformat(),
        "period_to": inv.period_to.isoformat(),
        "line_items": [
            {
                "item_id": i.item_id,
                "role": i.role,
                "shift_type": i.shift_type,
                "quantity": i.quantity,
                "rate_per_slot": i.rate_per_slot,
                "line_total": i.line_total,
                "description": i.description,
            }
            for i in inv.line_items
        ],
        "subtotal": tax.subtotal,
        "gst_type": tax.gst_type.value,
        "gst_rate": tax.gst_rate,
        "gst_amount": tax.gst_amount,
        "cgst_rate": tax.cgst_rate,
        "cgst_amount": tax.cgst_amount,
        "sgst_rate": tax.sgst_rate,
        "sgst_amount": tax.sgst_amount,
        "igst_rate": tax.igst_rate,
        "igst_amount": tax.igst_amount,
        "total_amount": tax.total_amount,
        "status": inv.status.value,
        "notes": inv.notes,
    }


def _auto_result_to_dict(result: AutoGenerateResult) -> dict:
    return {
        "created": [invoice_to_dict(i) for i in result.created],
        "skipped_site_ids": result.skipped_site_ids,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/invoices", methods=["GET"], endpoint="invoices_list")
    @admin_required
    def invoices_list():
        status_s = request.args.get("status")
        status = parse_enum(InvoiceStatus, status_s, "Status") if status_s else None
        return jsonify([invoice_to_dict(i) for i in container.invoice_service.list_invoices(status=status)])

    @app.route("/api/invoices", methods=["POST"], endpoint="invoices_create")
    @admin_required
    def invoices_create():
        data = json_body()
        try:
            site_id = int(data.get("site_id"))
        except (TypeError, ValueError, OverflowError):
            raise ValidationError("site_id is required")

        invoice = container.invoice_service.create_from_site(
            current_role=current_session_user().role,
            site_id=site_id,
            period_from=parse_iso_date(data.get("period_from")),
            period_to=parse_iso_date(data.get("period_to")),
            invoice_date=parse_optional_date(data.get("invoice_date"), today_local()),
            notes=optional_text(data.get("notes"), "Notes") or None,
        )
        return jsonify(invoice_to_dict(invoice)), 201

    @app.route("/api/invoices/custom", methods=["POST"], endpoint="invoices_create_custom")
    @admin_required
    def invoices_create_custom():
        invoice = container.invoice_service.create_custom(current_role=current_session_user().role, data=json_body())
        return jsonify(invoice_to_dict(invoice)), 201

    @app.route("/api/invoices/auto-generate", methods=["POST"], endpoint="invoices_auto_generate")
    @admin_required
    def invoices_auto_generate():
        data = json_body()
        today = today_local()
        try:
            year = int(data.get("year") or today.year)
            month = int(data.get("month") or today.month)
        except (TypeError, ValueError, OverflowError):
            raise ValidationError("year and month must be numbers")

        result = container.invoice_service.auto_generate_for_month(
            current_role=current_session_user().role,
            year=year,
            month=month,
        )
        return jsonify(_auto_result_to_dict(result)), 201

    @app.route("/api/invoices/<int:invoice_id>", methods=["GET"], endpoint="invoices_get")
    @admin_required
    def invoices_get(invoice_id: int):
        return jsonify(invoice_to_dict(container.invoice_service.get_invoice(invoice_id)))

    @app.route("/api/invoices/<int:invoice_id>", methods=["PATCH"], endpoint="invoices_update")
    @admin_required
    def invoices_update(invoice_id: int):
        data = json_body()
        status_s = data.get("status")
        notes = data.get("notes")
        if notes is not None and not isinstance(notes, str):
            raise ValidationError("notes must be a string")
        if "notes" in data and notes is None:
            notes = ""

        invoice = container.invoice_service.update_invoice(
            current_role=current_session_user().role,
            invoice_id=invoice_id,
            status=parse_enum(InvoiceStatus, status_s, "Status") if status_s else None,
            notes=notes,
        )
        return jsonify(invoice_to_dict(invoice))

    @app.route("/api/invoices/<int:invoice_id>", methods=["DELETE"], endpoint="invoices_delete")
    @admin_required
    def invoices_delete(invoice_id: int):
        container.invoice_service.delete_invoice(current_role=current_session_user().role, invoice_id=invoice_id)
        return "", 204
