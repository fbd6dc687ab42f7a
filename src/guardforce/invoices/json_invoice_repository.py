"""Invoice store backed by a local JSON file, used when no database is wanted."""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Sequence

from ..core.enums import InvoiceStatus
from .codec import draft_to_row, invoice_from_row
from .model import Invoice, InvoiceDraft
from .repository import InvoiceRepository

logger = logging.getLogger(__name__)


def _line(item_id: str, role: str, shift_type: str, quantity: int, rate: float) -> dict:
    return {
        "item_id": item_id,
        "role": role,
        "shift_type": shift_type,
        "quantity": quantity,
        "rate_per_slot": rate,
        "line_total": quantity * rate,
        "description": f"{role} - {shift_type.capitalize()} Shift",
    }


SAMPLE_INVOICES = [
    {
        "invoice_id": 1,
        "invoice_number": "INV-20240823-001",
        "site_id": 1,
        "site_name": "Corporate Office Complex",
        "site_gst": None,
        "company_name": "SecureGuard Services Pvt Ltd",
        "company_gst": "29ABCDE1234F1Z5",
        "client_name": "TechCorp Industries",
        "client_address": "123 Business District, Tech Park, Bangalore - 560001",
        "invoice_date": "2024-08-23",
        "period_from": "2024-08-01",
        "period_to": "2024-08-31",
        "line_items": [
            _line("1-day", "Security Guard", "day", 10, 1500),
            _line("1-night", "Security Guard", "night", 8, 1800),
            _line("2-day", "Supervisor", "day", 2, 2500),
        ],
        "subtotal": 34400,
        "gst_type": "GST",
        "gst_rate": 18,
        "gst_amount": 6192,
        "cgst_rate": 9,
        "cgst_amount": 3096,
        "sgst_rate": 9,
        "sgst_amount": 3096,
        "igst_rate": 0,
        "igst_amount": 0,
        "total_amount": 40592,
        "status": "sent",
        "notes": "Monthly security services for August 2024",
    },
    {
        "invoice_id": 2,
        "invoice_number": "INV-20240822-002",
        "site_id": 2,
        "site_name": "Manufacturing Plant",
        "site_gst": None,
        "company_name": "SecureGuard Services Pvt Ltd",
        "company_gst": "29ABCDE1234F1Z5",
        "client_name": "Industrial Corp",
        "client_address": "456 Industrial Area, Sector 5, Gurgaon - 122001",
        "invoice_date": "2024-08-22",
        "period_from": "2024-08-01",
        "period_to": "2024-08-31",
        "line_items": [
            _line("3-day", "Security Guard", "day", 15, 1400),
            _line("3-night", "Security Guard", "night", 15, 1700),
        ],
        "subtotal": 46500,
        "gst_type": "RCM",
        "gst_rate": 18,
        "gst_amount": 8370,
        "cgst_rate": 9,
        "cgst_amount": 4185,
        "sgst_rate": 9,
        "sgst_amount": 4185,
        "igst_rate": 0,
        "igst_amount": 0,
        "total_amount": 46500,
        "status": "paid",
        "notes": None,
    },
]


def _jsonable(row: dict) -> dict:
    return {k: (v.isoformat() if isinstance(v, date) else v) for k, v in row.items()}


class JsonInvoiceRepository(InvoiceRepository):
    """Keeps every invoice in one JSON array; rows are read and rewritten per call.

    A missing file starts with the two sample invoices.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    def _load(self) -> list[dict]:
        if not self._path.exists():
            return [dict(r) for r in SAMPLE_INVOICES]
        with self._path.open("r", encoding="utf-8") as f:
            rows = json.load(f)
        if not isinstance(rows, list):
            raise ValueError(f"Invoice store {self._path} does not hold a JSON array")
        return rows

    def _save(self, rows: list[dict]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2)
        tmp.replace(self._path)

    def list_all(self) -> Sequence[Invoice]:
        invoices = [invoice_from_row(r) for r in self._load()]
        return sorted(invoices, key=lambda i: (i.invoice_date, i.invoice_id), reverse=True)

    def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        for r in self._load():
            if int(r["invoice_id"]) == int(invoice_id):
                return invoice_from_row(r)
        return None

    def list_numbers_with_prefix(self, prefix: str) -> Sequence[str]:
        return [r["invoice_number"] for r in self._load() if r["invoice_number"].startswith(prefix)]

    def site_ids_with_period_starting(self, start: date, end: date) -> set[int]:
        found = set()
        for inv in (invoice_from_row(r) for r in self._load()):
            if inv.site_id is not None and start <= inv.period_from <= end:
                found.add(inv.site_id)
        return found

    def create(self, draft: InvoiceDraft) -> int:
        rows = self._load()
        invoice_id = max((int(r["invoice_id"]) for r in rows), default=0) + 1
        rows.append({"invoice_id": invoice_id, **_jsonable(draft_to_row(draft))})
        self._save(rows)
        logger.debug("Stored invoice %s in %s", invoice_id, self._path)
        return invoice_id

    def update_status_notes(self, invoice_id: int, *, status: InvoiceStatus, notes: Optional[str]) -> bool:
        rows = self._load()
        for r in rows:
            if int(r["invoice_id"]) == int(invoice_id):
                r["status"] = status.value
                r["notes"] = notes
                self._save(rows)
                return True
        return False

    def delete_by_id(self, invoice_id: int) -> bool:
        rows = self._load()
        kept = [r for r in rows if int(r["invoice_id"]) != int(invoice_id)]
        if len(kept) == len(rows):
            return False
        self._save(kept)
        return True
