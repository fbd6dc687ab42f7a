from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import StaffingRequestStatus


@dataclass(frozen=True)
class TemporaryStaffingRequest:
    """Ask for extra day/night guards at a site on one date."""

    request_id: int
    site_id: int
    request_date: date
    day_temp_slots: int
    night_temp_slots: int
    requested_by: str
    status: StaffingRequestStatus = StaffingRequestStatus.PENDING
    day_slot_pay_rate: Optional[float] = None
    night_slot_pay_rate: Optional[float] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class NewStaffingRequest:
    site_id: int
    request_date: date
    day_temp_slots: int
    night_temp_slots: int
    requested_by: str
    day_slot_pay_rate: Optional[float] = None
    night_slot_pay_rate: Optional[float] = None
    notes: Optional[str] = None
