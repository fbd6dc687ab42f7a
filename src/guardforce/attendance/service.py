from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_optional_date, today_local
from ..common.validators import optional_text, parse_enum
from ..core.enums import AttendanceStatus, Role, ShiftType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..guards.repository import GuardRepository
from ..sites.repository import SiteRepository
from .model import AttendanceRecord, NewAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

ATTENDANCE_MARKER_ROLES = frozenset({Role.ADMIN, Role.SUPERVISOR})


def _optional_id(value: Any, field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{field_name} must be an id")


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, guards: GuardRepository, sites: SiteRepository):
        self._attendance = attendance
        self._guards = guards
        self._sites = sites

    def list_for_date(self, on_date: date, *, site_id: Optional[int] = None) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_date(on_date, site_id=site_id)

    def mark(self, *, current_role: Role, data: Mapping[str, Any]) -> AttendanceRecord:
        """Record one guard's attendance for a site/shift on a date.

        Note:
        - `replaced` needs the replacement guard, `reassigned` the target site.
        - A guard has at most one record per site, shift type and date.
        - A guard present at one site cannot be marked present at another
          site for the same shift type and date.
        """
        if current_role not in ATTENDANCE_MARKER_ROLES:
            raise AuthorizationError("Only admins and supervisors can mark attendance")

        guard_id = _optional_id(data.get("guard_id"), "Guard")
        site_id = _optional_id(data.get("site_id"), "Site")
        if guard_id is None or site_id is None:
            raise ValidationError("Guard and site are required")

        shift_type = parse_enum(ShiftType, data.get("shift_type"), "Shift type")
        status = parse_enum(AttendanceStatus, data.get("status"), "Status")
        on_date = parse_optional_date(data.get("attendance_date"), today_local())
        replacement_guard_id = _optional_id(data.get("replacement_guard_id"), "Replacement guard")
        reassigned_site_id = _optional_id(data.get("reassigned_site_id"), "Reassigned site")

        if status == AttendanceStatus.REPLACED:
            if replacement_guard_id is None:
                raise ValidationError("A replacement guard is required when status is replaced")
            if replacement_guard_id == guard_id:
                raise ValidationError("A guard cannot replace themselves")
            if not self._guards.get_by_id(replacement_guard_id):
                raise NotFoundError("Replacement guard not found")
        else:
            replacement_guard_id = None

        if status == AttendanceStatus.REASSIGNED:
            if reassigned_site_id is None:
                raise ValidationError("A target site is required when status is reassigned")
            if not self._sites.get_by_id(reassigned_site_id):
                raise NotFoundError("Reassigned site not found")
        else:
            reassigned_site_id = None

        if not self._guards.get_by_id(guard_id):
            raise NotFoundError("Guard not found")
        if not self._sites.get_by_id(site_id):
            raise NotFoundError("Site not found")

        existing = self._attendance.get_for_guard_shift_date(
            guard_id=guard_id, site_id=site_id, shift_type=shift_type, on_date=on_date
        )
        if existing:
            raise ValidationError("Attendance already marked for this guard, shift and date")

        if status == AttendanceStatus.PRESENT:
            elsewhere = self._attendance.find_present_elsewhere(
                guard_id=guard_id, shift_type=shift_type, on_date=on_date, exclude_site_id=site_id
            )
            if elsewhere:
                raise ValidationError(
                    f"Guard is already marked present at site {elsewhere.site_id} for this {shift_type.value} shift"
                )

        attendance_id = self._attendance.create(
            NewAttendance(
                attendance_date=on_date,
                site_id=site_id,
                shift_id=_optional_id(data.get("shift_id"), "Shift"),
                shift_type=shift_type,
                guard_id=guard_id,
                status=status,
                replacement_guard_id=replacement_guard_id,
                reassigned_site_id=reassigned_site_id,
                notes=optional_text(data.get("notes"), "Notes") or None,
            )
        )
        logger.info("Marked guard %s %s at site %s (%s, %s)", guard_id, status.value, site_id, shift_type.value, on_date)
        return self._attendance.get_by_id(attendance_id)

    def delete(self, *, current_role: Role, attendance_id: int) -> None:
        if current_role not in ATTENDANCE_MARKER_ROLES:
            raise AuthorizationError("Only admins and supervisors can delete attendance")
        if not self._attendance.delete_by_id(int(attendance_id)):
            raise NotFoundError("Attendance record not found")
        logger.info("Deleted attendance %s", attendance_id)
