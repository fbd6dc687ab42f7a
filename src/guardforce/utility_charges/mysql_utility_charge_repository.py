from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import UtilityCharge, UtilityChargeDraft
from .repository import UtilityChargeRepository

_COLUMNS = "charge_id, site_id, description, amount, is_active"


def _charge_from_row(r: dict) -> UtilityCharge:
    return UtilityCharge(
        charge_id=int(r["charge_id"]),
        site_id=int(r["site_id"]),
        description=r["description"],
        amount=to_float(r["amount"]) or 0.0,
        is_active=bool(r["is_active"]),
    )


class MySQLUtilityChargeRepository(UtilityChargeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self, *, site_id: Optional[int] = None) -> Sequence[UtilityCharge]:
        if site_id is not None:
            sql = f"SELECT {_COLUMNS} FROM utility_charges WHERE is_active=1 AND site_id=%s ORDER BY description"
            params: tuple = (int(site_id),)
        else:
            sql = f"SELECT {_COLUMNS} FROM utility_charges WHERE is_active=1 ORDER BY created_at DESC, charge_id DESC"
            params = ()

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_charge_from_row(r) for r in fetchall(cur)]

    def get_by_id(self, charge_id: int) -> Optional[UtilityCharge]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM utility_charges WHERE charge_id=%s", (int(charge_id),))
            r = fetchone(cur)
            return _charge_from_row(r) if r else None

    def create(self, draft: UtilityChargeDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO utility_charges(site_id, description, amount, is_active) VALUES(%s,%s,%s,1)",
                (int(draft.site_id), draft.description, draft.amount),
            )
            return int(cur.lastrowid)

    def update(self, charge_id: int, *, description: str, amount: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 FROM utility_charges WHERE charge_id=%s AND is_active=1", (int(charge_id),))
            if not fetchone(cur):
                return False
            cur.execute(
                "UPDATE utility_charges SET description=%s, amount=%s WHERE charge_id=%s",
                (description, amount, int(charge_id)),
            )
            return True

    def deactivate(self, charge_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE utility_charges SET is_active=0 WHERE charge_id=%s AND is_active=1",
                (int(charge_id),),
            )
            return cur.rowcount > 0
