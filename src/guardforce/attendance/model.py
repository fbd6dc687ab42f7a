from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus, ShiftType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: a guard's attendance for one shift on one date."""

    attendance_id: int
    attendance_date: date
    site_id: int
    shift_type: ShiftType
    guard_id: int
    status: AttendanceStatus
    shift_id: Optional[int] = None
    replacement_guard_id: Optional[int] = None
    reassigned_site_id: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class NewAttendance:
    attendance_date: date
    site_id: int
    shift_type: ShiftType
    guard_id: int
    status: AttendanceStatus
    shift_id: Optional[int] = None
    replacement_guard_id: Optional[int] = None
    reassigned_site_id: Optional[int] = None
    notes: Optional[str] = None
