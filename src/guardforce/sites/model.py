from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import GstType


@dataclass(frozen=True)
class StaffingRequirement:
    """Budgeted slots for one role at a site."""

    role_type: str
    budget_per_slot: float
    day_slots: int
    night_slots: int
    requirement_id: Optional[int] = None
    site_id: Optional[int] = None


@dataclass(frozen=True)
class Site:
    site_id: int
    site_name: str
    organization_name: str
    gst_number: str
    gst_type: GstType
    address_line1: str
    address_line2: Optional[str] = None
    address_line3: Optional[str] = None
    site_category: str = ""
    personal_billing_name: Optional[str] = None
    staffing_requirements: tuple[StaffingRequirement, ...] = field(default_factory=tuple)

    @property
    def address(self) -> str:
        return join_address(self.address_line1, self.address_line2, self.address_line3)

    @property
    def day_slots(self) -> int:
        return sum(r.day_slots for r in self.staffing_requirements)

    @property
    def night_slots(self) -> int:
        return sum(r.night_slots for r in self.staffing_requirements)


@dataclass(frozen=True)
class SiteDraft:
    """Validated input for create/update."""

    site_name: str
    organization_name: str
    gst_number: str
    gst_type: GstType
    address_line1: str
    address_line2: Optional[str]
    address_line3: Optional[str]
    site_category: str
    personal_billing_name: Optional[str]
    staffing_requirements: tuple[StaffingRequirement, ...]

    @property
    def address(self) -> str:
        return join_address(self.address_line1, self.address_line2, self.address_line3)


def join_address(*lines: Optional[str]) -> str:
    return ", ".join(line for line in lines if line)
