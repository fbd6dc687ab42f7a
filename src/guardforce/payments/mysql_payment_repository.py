from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import normalize_mysql_date
from ..core.enums import PaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import PaymentDraft, PaymentRecord
from .repository import PaymentRepository

_COLUMNS = "payment_id, guard_id, payment_date, amount, payment_type, pay_month, note"


def _payment_from_row(r: dict) -> PaymentRecord:
    return PaymentRecord(
        payment_id=int(r["payment_id"]),
        guard_id=int(r["guard_id"]),
        payment_date=normalize_mysql_date(r["payment_date"]),
        amount=to_float(r["amount"]) or 0.0,
        payment_type=PaymentType(r["payment_type"]),
        month=r["pay_month"],
        note=r.get("note"),
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, guard_id: Optional[int] = None, month: Optional[str] = None) -> Sequence[PaymentRecord]:
        sql = f"SELECT {_COLUMNS} FROM payment_records WHERE 1=1"
        params: list = []
        if guard_id is not None:
            sql += " AND guard_id=%s"
            params.append(int(guard_id))
        if month is not None:
            sql += " AND pay_month=%s"
            params.append(month)
        sql += " ORDER BY payment_date DESC, payment_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_payment_from_row(r) for r in fetchall(cur)]

    def get_by_id(self, payment_id: int) -> Optional[PaymentRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payment_records WHERE payment_id=%s", (int(payment_id),))
            r = fetchone(cur)
            return _payment_from_row(r) if r else None

    def create(self, draft: PaymentDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payment_records(guard_id, payment_date, amount, payment_type, pay_month, note)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(draft.guard_id),
                    draft.payment_date,
                    draft.amount,
                    draft.payment_type.value,
                    draft.month,
                    draft.note,
                ),
            )
            return int(cur.lastrowid)

    def update(self, payment_id: int, draft: PaymentDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 FROM payment_records WHERE payment_id=%s", (int(payment_id),))
            if not fetchone(cur):
                return False
            cur.execute(
                """
                UPDATE payment_records
                SET guard_id=%s, payment_date=%s, amount=%s, payment_type=%s, pay_month=%s, note=%s
                WHERE payment_id=%s
                """,
                (
                    int(draft.guard_id),
                    draft.payment_date,
                    draft.amount,
                    draft.payment_type.value,
                    draft.month,
                    draft.note,
                    int(payment_id),
                ),
            )
            return True

    def delete_by_id(self, payment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payment_records WHERE payment_id=%s", (int(payment_id),))
            return cur.rowcount > 0
