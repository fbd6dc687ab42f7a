from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import normalize_mysql_date
from ..core.enums import ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import NewShift, Shift
from .repository import ShiftRepository

_COLUMNS = """
    shift_id, site_id, shift_type, guard_id, is_temporary,
    role_type, temporary_pay_rate, created_for_date
"""


def _shift_from_row(r: dict) -> Shift:
    return Shift(
        shift_id=int(r["shift_id"]),
        site_id=int(r["site_id"]),
        shift_type=ShiftType(r["shift_type"]),
        guard_id=int(r["guard_id"]) if r.get("guard_id") is not None else None,
        is_temporary=bool(r.get("is_temporary")),
        role_type=r.get("role_type"),
        temporary_pay_rate=to_float(r.get("temporary_pay_rate")),
        created_for_date=normalize_mysql_date(r.get("created_for_date")),
    )


def _insert_params(s: NewShift) -> tuple:
    return (
        int(s.site_id),
        s.shift_type.value,
        s.guard_id,
        1 if s.is_temporary else 0,
        s.role_type,
        s.temporary_pay_rate,
        s.created_for_date,
    )


_INSERT = """
    INSERT INTO shifts(site_id, shift_type, guard_id, is_temporary, role_type, temporary_pay_rate, created_for_date)
    VALUES(%s,%s,%s,%s,%s,%s,%s)
"""


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _shift_from_row(r) if r else None

    def list_by_site(self, site_id: int) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM shifts
                WHERE site_id=%s AND is_temporary=0
                ORDER BY shift_type, shift_id
                """,
                (int(site_id),),
            )
            return [_shift_from_row(r) for r in fetchall(cur)]

    def list_by_site_and_date(self, site_id: int, on_date: date) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM shifts
                WHERE site_id=%s AND (is_temporary=0 OR created_for_date=%s)
                ORDER BY shift_type, shift_id
                """,
                (int(site_id), on_date),
            )
            return [_shift_from_row(r) for r in fetchall(cur)]

    def list_temporary(self, site_id: int, on_date: date) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM shifts
                WHERE site_id=%s AND is_temporary=1 AND created_for_date=%s
                ORDER BY shift_type, shift_id
                """,
                (int(site_id), on_date),
            )
            return [_shift_from_row(r) for r in fetchall(cur)]

    def list_assigned(self) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE guard_id IS NOT NULL")
            return [_shift_from_row(r) for r in fetchall(cur)]

    def create(self, shift: NewShift) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_INSERT, _insert_params(shift))
            return int(cur.lastrowid)

    def create_many(self, shifts: Sequence[NewShift]) -> int:
        if not shifts:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(_INSERT, [_insert_params(s) for s in shifts])
            return len(shifts)

    def set_guard(self, shift_id: int, guard_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE shifts SET guard_id=%s WHERE shift_id=%s",
                (guard_id, int(shift_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, shift_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE shift_id=%s", (int(shift_id),))
            return cur.rowcount > 0
