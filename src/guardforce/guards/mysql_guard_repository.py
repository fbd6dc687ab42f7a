from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import GuardStatus, GuardType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import Guard
from .repository import GuardRepository


def _guard_from_row(r: dict) -> Guard:
    return Guard(
        guard_id=int(r["guard_id"]),
        name=r["name"],
        badge_number=r["badge_number"],
        email=r.get("email") or "",
        phone=r.get("phone") or "",
        status=GuardStatus(r["status"]),
        guard_type=GuardType(r["guard_type"]),
        pay_rate=to_float(r.get("pay_rate")) or 0.0,
    )


class MySQLGuardRepository(GuardRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Guard]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT guard_id, name, badge_number, email, phone, status, guard_type, pay_rate
                FROM guards
                ORDER BY name
                """
            )
            return [_guard_from_row(r) for r in fetchall(cur)]

    def get_by_id(self, guard_id: int) -> Optional[Guard]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT guard_id, name, badge_number, email, phone, status, guard_type, pay_rate
                FROM guards
                WHERE guard_id=%s
                """,
                (int(guard_id),),
            )
            r = fetchone(cur)
            return _guard_from_row(r) if r else None

    def get_by_badge(self, badge_number: str) -> Optional[Guard]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT guard_id, name, badge_number, email, phone, status, guard_type, pay_rate
                FROM guards
                WHERE badge_number=%s
                """,
                (badge_number,),
            )
            r = fetchone(cur)
            return _guard_from_row(r) if r else None

    def create(
        self,
        *,
        name: str,
        badge_number: str,
        email: str,
        phone: str,
        status: GuardStatus,
        guard_type: GuardType,
        pay_rate: float,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO guards(name, badge_number, email, phone, status, guard_type, pay_rate)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (name, badge_number, email, phone, status.value, guard_type.value, pay_rate),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        guard_id: int,
        name: str,
        badge_number: str,
        email: str,
        phone: str,
        status: GuardStatus,
        guard_type: GuardType,
        pay_rate: float,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE guards
                SET name=%s, badge_number=%s, email=%s, phone=%s, status=%s, guard_type=%s, pay_rate=%s
                WHERE guard_id=%s
                """,
                (name, badge_number, email, phone, status.value, guard_type.value, pay_rate, int(guard_id)),
            )
            cur.execute("SELECT 1 AS found FROM guards WHERE guard_id=%s", (int(guard_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, guard_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM guards WHERE guard_id=%s", (int(guard_id),))
            return cur.rowcount > 0
