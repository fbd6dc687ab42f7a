from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import normalize_mysql_date
from ..core.enums import StaffingRequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import NewStaffingRequest, TemporaryStaffingRequest
from .repository import StaffingRequestRepository

_COLUMNS = """
    request_id, site_id, request_date, day_temp_slots, night_temp_slots,
    day_slot_pay_rate, night_slot_pay_rate, notes, requested_by, status
"""


def _request_from_row(r: dict) -> TemporaryStaffingRequest:
    return TemporaryStaffingRequest(
        request_id=int(r["request_id"]),
        site_id=int(r["site_id"]),
        request_date=normalize_mysql_date(r["request_date"]),
        day_temp_slots=int(r["day_temp_slots"] or 0),
        night_temp_slots=int(r["night_temp_slots"] or 0),
        day_slot_pay_rate=to_float(r.get("day_slot_pay_rate")),
        night_slot_pay_rate=to_float(r.get("night_slot_pay_rate")),
        notes=r.get("notes"),
        requested_by=r["requested_by"],
        status=StaffingRequestStatus(r["status"]),
    )


class MySQLStaffingRequestRepository(StaffingRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[TemporaryStaffingRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM temporary_staffing_requests ORDER BY request_date DESC, request_id DESC")
            return [_request_from_row(r) for r in fetchall(cur)]

    def get_by_id(self, request_id: int) -> Optional[TemporaryStaffingRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM temporary_staffing_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _request_from_row(r) if r else None

    def create(self, request: NewStaffingRequest) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO temporary_staffing_requests(
                    site_id, request_date, day_temp_slots, night_temp_slots,
                    day_slot_pay_rate, night_slot_pay_rate, notes, requested_by, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(request.site_id),
                    request.request_date,
                    int(request.day_temp_slots),
                    int(request.night_temp_slots),
                    request.day_slot_pay_rate,
                    request.night_slot_pay_rate,
                    request.notes,
                    request.requested_by,
                    StaffingRequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def set_status(self, request_id: int, status: StaffingRequestStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 FROM temporary_staffing_requests WHERE request_id=%s", (int(request_id),))
            if not fetchone(cur):
                return False
            cur.execute(
                "UPDATE temporary_staffing_requests SET status=%s WHERE request_id=%s",
                (status.value, int(request_id)),
            )
            return True
