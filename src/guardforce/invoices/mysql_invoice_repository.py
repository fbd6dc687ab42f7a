from __future__ import annotations

import json
from datetime import date
from typing import Optional, Sequence

from ..core.enums import InvoiceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .codec import ROW_COLUMNS, draft_to_row, invoice_from_row
from .model import Invoice, InvoiceDraft
from .repository import InvoiceRepository

_SELECT = f"SELECT invoice_id, {', '.join(ROW_COLUMNS)} FROM invoices"


class MySQLInvoiceRepository(InvoiceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Invoice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY invoice_date DESC, invoice_id DESC")
            return [invoice_from_row(r) for r in fetchall(cur)]

    def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE invoice_id=%s", (int(invoice_id),))
            r = fetchone(cur)
            return invoice_from_row(r) if r else None

    def list_numbers_with_prefix(self, prefix: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT invoice_number FROM invoices WHERE invoice_number LIKE %s", (f"{prefix}%",))
            return [r["invoice_number"] for r in fetchall(cur)]

    def site_ids_with_period_starting(self, start: date, end: date) -> set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT site_id FROM invoices
                WHERE site_id IS NOT NULL AND period_from BETWEEN %s AND %s
                """,
                (start, end),
            )
            return {int(r["site_id"]) for r in fetchall(cur)}

    def create(self, draft: InvoiceDraft) -> int:
        row = draft_to_row(draft)
        row["line_items"] = json.dumps(row["line_items"])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO invoices({', '.join(ROW_COLUMNS)})
                VALUES({', '.join(['%s'] * len(ROW_COLUMNS))})
                """,
                tuple(row[c] for c in ROW_COLUMNS),
            )
            return int(cur.lastrowid)

    def update_status_notes(self, invoice_id: int, *, status: InvoiceStatus, notes: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 FROM invoices WHERE invoice_id=%s", (int(invoice_id),))
            if not fetchone(cur):
                return False
            cur.execute(
                "UPDATE invoices SET status=%s, notes=%s WHERE invoice_id=%s",
                (status.value, notes, int(invoice_id)),
            )
            return True

    def delete_by_id(self, invoice_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM invoices WHERE invoice_id=%s", (int(invoice_id),))
            return cur.rowcount > 0
