"""Per-site attendance overview for a single date."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ..core.enums import OverviewStatus, ShiftType
from ..shifts.repository import ShiftRepository
from ..sites.repository import SiteRepository
from .repository import AttendanceRepository


def derive_overview_status(
    day_assigned: int,
    night_assigned: int,
    day_present: int,
    night_present: int,
) -> OverviewStatus:
    """Marking status of a site, first match wins."""
    if day_assigned == 0 and night_assigned == 0:
        return OverviewStatus.NO_SHIFTS
    if day_present == day_assigned and night_present == night_assigned:
        return OverviewStatus.FULLY_MARKED
    if day_present == 0 and night_present == 0:
        return OverviewStatus.NOT_MARKED
    return OverviewStatus.PARTIALLY_MARKED


@dataclass(frozen=True)
class SiteOverview:
    site_id: int
    site_name: str
    address: str
    day_slots: int
    night_slots: int
    day_assigned: int
    night_assigned: int
    day_present: int
    night_present: int
    status: OverviewStatus


class AttendanceOverviewService:
    def __init__(self, sites: SiteRepository, shifts: ShiftRepository, attendance: AttendanceRepository):
        self._sites = sites
        self._shifts = shifts
        self._attendance = attendance

    def get_overview(self, on_date: date) -> Sequence[SiteOverview]:
        sites = self._sites.list_all()
        assigned = Counter((s.site_id, s.shift_type) for s in self._shifts.list_assigned())
        present = Counter((r.site_id, r.shift_type) for r in self._attendance.list_present_for_date(on_date))

        rows = []
        for site in sites:
            day_assigned = assigned[(site.site_id, ShiftType.DAY)]
            night_assigned = assigned[(site.site_id, ShiftType.NIGHT)]
            day_present = present[(site.site_id, ShiftType.DAY)]
            night_present = present[(site.site_id, ShiftType.NIGHT)]
            rows.append(
                SiteOverview(
                    site_id=site.site_id,
                    site_name=site.site_name,
                    address=site.address,
                    day_slots=site.day_slots,
                    night_slots=site.night_slots,
                    day_assigned=day_assigned,
                    night_assigned=night_assigned,
                    day_present=day_present,
                    night_present=night_present,
                    status=derive_overview_status(day_assigned, night_assigned, day_present, night_present),
                )
            )
        return rows
