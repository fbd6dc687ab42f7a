from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ShiftType
from .model import AttendanceRecord, NewAttendance


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_date(self, on_date: date, *, site_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_present_for_date(self, on_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def find_for_guards(
        self,
        *,
        site_id: int,
        shift_type: ShiftType,
        on_date: date,
        guard_ids: Sequence[int],
    ) -> Sequence[AttendanceRecord]:
        """Records of `guard_ids` at a site/shift type on one date, any status."""

        raise NotImplementedError

    def get_for_guard_shift_date(
        self,
        *,
        guard_id: int,
        site_id: int,
        shift_type: ShiftType,
        on_date: date,
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def find_present_elsewhere(
        self,
        *,
        guard_id: int,
        shift_type: ShiftType,
        on_date: date,
        exclude_site_id: int,
    ) -> Optional[AttendanceRecord]:
        """A present record of the guard for the same date and shift type at another site."""
        raise NotImplementedError

    def list_between(self, start: date, end: date, *, guard_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        """Records dated start..end inclusive, optionally for one guard."""
        raise NotImplementedError

    def create(self, record: NewAttendance) -> int:
        raise NotImplementedError

    def delete_by_id(self, attendance_id: int) -> bool:
        raise NotImplementedError
