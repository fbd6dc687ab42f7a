from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import normalize_mysql_date
from ..core.enums import AttendanceStatus, ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import AttendanceRecord, NewAttendance
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, attendance_date, site_id, shift_id, shift_type, guard_id, status,
    replacement_guard_id, reassigned_site_id, notes
"""


def _optional_int(value) -> Optional[int]:
    return int(value) if value is not None else None


def _record_from_row(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        attendance_date=normalize_mysql_date(r["attendance_date"]),
        site_id=int(r["site_id"]),
        shift_id=_optional_int(r.get("shift_id")),
        shift_type=ShiftType(r["shift_type"]),
        guard_id=int(r["guard_id"]),
        status=AttendanceStatus(r["status"]),
        replacement_guard_id=_optional_int(r.get("replacement_guard_id")),
        reassigned_site_id=_optional_int(r.get("reassigned_site_id")),
        notes=r.get("notes"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s",
                (int(attendance_id),),
            )
            r = fetchone(cur)
            return _record_from_row(r) if r else None

    def list_for_date(self, on_date: date, *, site_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        sql = f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_date=%s"
        params: list = [on_date]
        if site_id is not None:
            sql += " AND site_id=%s"
            params.append(int(site_id))
        sql += " ORDER BY site_id, shift_type, attendance_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_record_from_row(r) for r in fetchall(cur)]

    def list_present_for_date(self, on_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE attendance_date=%s AND status=%s
                """,
                (on_date, AttendanceStatus.PRESENT.value),
            )
            return [_record_from_row(r) for r in fetchall(cur)]

    def find_for_guards(
        self,
        *,
        site_id: int,
        shift_type: ShiftType,
        on_date: date,
        guard_ids: Sequence[int],
    ) -> Sequence[AttendanceRecord]:
        if not guard_ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE site_id=%s AND shift_type=%s AND attendance_date=%s
                  AND guard_id IN ({in_clause(guard_ids)})
                """,
                (int(site_id), shift_type.value, on_date, *[int(g) for g in guard_ids]),
            )
            return [_record_from_row(r) for r in fetchall(cur)]

    def get_for_guard_shift_date(
        self,
        *,
        guard_id: int,
        site_id: int,
        shift_type: ShiftType,
        on_date: date,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE guard_id=%s AND site_id=%s AND shift_type=%s AND attendance_date=%s
                LIMIT 1
                """,
                (int(guard_id), int(site_id), shift_type.value, on_date),
            )
            r = fetchone(cur)
            return _record_from_row(r) if r else None

    def find_present_elsewhere(
        self,
        *,
        guard_id: int,
        shift_type: ShiftType,
        on_date: date,
        exclude_site_id: int,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM attendance_records
                WHERE guard_id=%s AND shift_type=%s AND attendance_date=%s
                  AND status=%s AND site_id<>%s
                LIMIT 1
                """,
                (int(guard_id), shift_type.value, on_date, AttendanceStatus.PRESENT.value, int(exclude_site_id)),
            )
            r = fetchone(cur)
            return _record_from_row(r) if r else None

    def list_between(self, start: date, end: date, *, guard_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        sql = f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_date BETWEEN %s AND %s"
        params: list = [start, end]
        if guard_id is not None:
            sql += " AND guard_id=%s"
            params.append(int(guard_id))
        sql += " ORDER BY attendance_date, attendance_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_record_from_row(r) for r in fetchall(cur)]

    def create(self, record: NewAttendance) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(
                    attendance_date, site_id, shift_id, shift_type, guard_id, status,
                    replacement_guard_id, reassigned_site_id, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.attendance_date,
                    int(record.site_id),
                    record.shift_id,
                    record.shift_type.value,
                    int(record.guard_id),
                    record.status.value,
                    record.replacement_guard_id,
                    record.reassigned_site_id,
                    record.notes,
                ),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            return cur.rowcount > 0
