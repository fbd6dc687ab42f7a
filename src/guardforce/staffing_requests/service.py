from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text, require_non_negative_int, to_number
from ..core.enums import Role, StaffingRequestStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..sites.repository import SiteRepository
from .model import NewStaffingRequest, TemporaryStaffingRequest
from .repository import StaffingRequestRepository

logger = logging.getLogger(__name__)


def _optional_rate(value: Any, field_name: str) -> Optional[float]:
    if value in (None, ""):
        return None
    rate = to_number(value, field_name)
    if rate < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return rate


class StaffingRequestService:
    """Temporary staffing requests.

    Status is written as given; there is no transition check.
    """

    def __init__(self, requests: StaffingRequestRepository, sites: SiteRepository):
        self._requests = requests
        self._sites = sites

    def list_requests(self, *, status: Optional[StaffingRequestStatus] = None) -> Sequence[TemporaryStaffingRequest]:
        rows = self._requests.list_all()
        if status is not None:
            rows = [r for r in rows if r.status == status]
        return rows

    def create_request(self, *, current_role: Role, requested_by: str, data: Mapping[str, Any]) -> TemporaryStaffingRequest:
        if current_role not in (Role.ADMIN, Role.SUPERVISOR):
            raise AuthorizationError("Only admins and supervisors can request temporary staff")

        if data.get("site_id") in (None, ""):
            raise ValidationError("Site is required")
        if not data.get("request_date"):
            raise ValidationError("Request date is required")

        try:
            site_id = int(data["site_id"])
        except (TypeError, ValueError, OverflowError):
            raise ValidationError("Site is not valid")
        if not self._sites.get_by_id(site_id):
            raise NotFoundError("Site not found")

        day = require_non_negative_int(data.get("day_temp_slots"), "Day slots")
        night = require_non_negative_int(data.get("night_temp_slots"), "Night slots")
        if day + night == 0:
            raise ValidationError("Request at least one day or night slot")

        request_id = self._requests.create(
            NewStaffingRequest(
                site_id=site_id,
                request_date=parse_iso_date(data["request_date"]),
                day_temp_slots=day,
                night_temp_slots=night,
                day_slot_pay_rate=_optional_rate(data.get("day_slot_pay_rate"), "Day slot pay rate"),
                night_slot_pay_rate=_optional_rate(data.get("night_slot_pay_rate"), "Night slot pay rate"),
                notes=optional_text(data.get("notes"), "Notes") or None,
                requested_by=requested_by,
            )
        )
        logger.info("Staffing request %s for site %s (%d day, %d night) by %s", request_id, site_id, day, night, requested_by)
        return self._requests.get_by_id(request_id)

    def set_status(
        self,
        *,
        current_role: Role,
        request_id: int,
        status: StaffingRequestStatus,
    ) -> TemporaryStaffingRequest:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can change request status")
        if not self._requests.set_status(int(request_id), status):
            raise NotFoundError("Staffing request not found")
        logger.info("Staffing request %s set to %s", request_id, status.value)
        return self._requests.get_by_id(int(request_id))
