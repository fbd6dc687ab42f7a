from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ShiftType


@dataclass(frozen=True)
class Shift:
    """Domain entity: one (site, type) slot row, optionally holding a guard.

    A row with guard_id=None is an open slot. Temporary rows are only valid on
    created_for_date.
    """

    shift_id: int
    site_id: int
    shift_type: ShiftType
    guard_id: Optional[int] = None
    is_temporary: bool = False
    role_type: Optional[str] = None
    temporary_pay_rate: Optional[float] = None
    created_for_date: Optional[date] = None


@dataclass(frozen=True)
class NewShift:
    site_id: int
    shift_type: ShiftType
    guard_id: Optional[int] = None
    is_temporary: bool = False
    role_type: Optional[str] = None
    temporary_pay_rate: Optional[float] = None
    created_for_date: Optional[date] = None


@dataclass(frozen=True)
class TemporarySlotRequest:
    """One row of the temporary slot dialog: a role with day/night counts."""

    role_type: str
    day_slots: int
    night_slots: int
    pay_rate: float
