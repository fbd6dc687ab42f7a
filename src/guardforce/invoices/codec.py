"""Flat row <-> Invoice conversion shared by the MySQL and JSON stores."""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Iterable, Optional

from ..common.datetime_utils import normalize_mysql_date
from ..core.enums import GstType, InvoiceStatus
from ..database.mysql_base import to_float
from .model import Invoice, InvoiceDraft, InvoiceLineItem, TaxBreakdown

TAX_COLUMNS = (
    "gst_rate",
    "gst_amount",
    "cgst_rate",
    "cgst_amount",
    "sgst_rate",
    "sgst_amount",
    "igst_rate",
    "igst_amount",
    "total_amount",
)

ROW_COLUMNS = (
    "invoice_number",
    "site_id",
    "site_name",
    "site_gst",
    "company_name",
    "company_gst",
    "client_name",
    "client_address",
    "invoice_date",
    "period_from",
    "period_to",
    "line_items",
    "subtotal",
    "gst_type",
    *TAX_COLUMNS,
    "status",
    "notes",
)


def line_items_to_list(items: Iterable[InvoiceLineItem]) -> list[dict]:
    return [asdict(i) for i in items]


def line_items_from_value(value: Any) -> tuple[InvoiceLineItem, ...]:
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value)
    return tuple(
        InvoiceLineItem(
            item_id=str(i.get("item_id", "")),
            role=i.get("role", ""),
            quantity=float(i.get("quantity", 0)),
            rate_per_slot=float(i.get("rate_per_slot", 0)),
            line_total=float(i.get("line_total", 0)),
            description=i.get("description", ""),
            shift_type=i.get("shift_type"),
        )
        for i in (value or [])
    )


def draft_to_row(draft: InvoiceDraft) -> dict:
    """Flatten a draft into column values (line items as a list, dates as date)."""
    row = {
        "invoice_number": draft.invoice_number,
        "site_id": draft.site_id,
        "site_name": draft.site_name,
        "site_gst": draft.site_gst,
        "company_name": draft.company_name,
        "company_gst": draft.company_gst,
        "client_name": draft.client_name,
        "client_address": draft.client_address,
        "invoice_date": draft.invoice_date,
        "period_from": draft.period_from,
        "period_to": draft.period_to,
        "line_items": line_items_to_list(draft.line_items),
        "subtotal": draft.tax.subtotal,
        "gst_type": draft.tax.gst_type.value,
        "status": draft.status.value,
        "notes": draft.notes,
    }
    for col in TAX_COLUMNS:
        row[col] = getattr(draft.tax, col)
    return row


def _float(value: Any) -> float:
    return to_float(value) or 0.0


def invoice_from_row(r: dict) -> Invoice:
    site_id: Optional[int] = int(r["site_id"]) if r.get("site_id") is not None else None
    tax = TaxBreakdown(
        gst_type=GstType(r["gst_type"]),
        subtotal=_float(r.get("subtotal")),
        **{col: _float(r.get(col)) for col in TAX_COLUMNS},
    )
    return Invoice(
        invoice_id=int(r["invoice_id"]),
        invoice_number=r["invoice_number"],
        site_id=site_id,
        site_name=r["site_name"],
        site_gst=r.get("site_gst"),
        company_name=r["company_name"],
        company_gst=r.get("company_gst") or "",
        client_name=r["client_name"],
        client_address=r.get("client_address") or "",
        invoice_date=normalize_mysql_date(r["invoice_date"]),
        period_from=normalize_mysql_date(r["period_from"]),
        period_to=normalize_mysql_date(r["period_to"]),
        line_items=line_items_from_value(r.get("line_items")),
        tax=tax,
        status=InvoiceStatus(r.get("status") or InvoiceStatus.DRAFT.value),
        notes=r.get("notes"),
    )
