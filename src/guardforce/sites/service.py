from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from ..common.validators import (
    optional_text,
    parse_enum,
    require_list,
    require_mapping,
    require_non_empty,
    require_non_negative_int,
    to_number,
)
from ..core.enums import GstType, Role, SITE_GST_TYPES
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Site, SiteDraft, StaffingRequirement
from .repository import SiteRepository

logger = logging.getLogger(__name__)


def parse_site_payload(data: Mapping[str, Any]) -> SiteDraft:
    """Validate a create/update payload into a SiteDraft."""
    gst_type = parse_enum(GstType, data.get("gst_type") or GstType.GST.value, "GST type")
    if gst_type not in SITE_GST_TYPES:
        raise ValidationError(f"GST type {gst_type.value} cannot be assigned to a site")

    personal_billing_name = optional_text(data.get("personal_billing_name"), "Personal billing name") or None

    requirements = []
    for i, raw in enumerate(require_list(data.get("staffing_requirements"), "Staffing requirements"), start=1):
        raw = require_mapping(raw, f"Requirement #{i}")
        role_type = require_non_empty(raw.get("role_type"), f"Role of requirement #{i}")
        budget = to_number(raw.get("budget_per_slot", 0), f"Budget per slot of {role_type}")
        if budget < 0:
            raise ValidationError(f"Budget per slot of {role_type} cannot be negative")
        requirements.append(
            StaffingRequirement(
                role_type=role_type,
                budget_per_slot=budget,
                day_slots=require_non_negative_int(raw.get("day_slots"), f"Day slots of {role_type}"),
                night_slots=require_non_negative_int(raw.get("night_slots"), f"Night slots of {role_type}"),
            )
        )

    return SiteDraft(
        site_name=require_non_empty(data.get("site_name"), "Site name"),
        organization_name=require_non_empty(data.get("organization_name"), "Organization name"),
        gst_number=optional_text(data.get("gst_number"), "GST number"),
        gst_type=gst_type,
        address_line1=require_non_empty(data.get("address_line1"), "Address line 1"),
        address_line2=optional_text(data.get("address_line2"), "Address line 2") or None,
        address_line3=optional_text(data.get("address_line3"), "Address line 3") or None,
        site_category=optional_text(data.get("site_category"), "Site category"),
        personal_billing_name=personal_billing_name,
        staffing_requirements=tuple(requirements),
    )


class SiteService:
    """Use case: manage sites and their staffing requirements."""

    def __init__(self, sites: SiteRepository):
        self._sites = sites

    def list_sites(self) -> Sequence[Site]:
        return self._sites.list_all()

    def get_site(self, site_id: int) -> Site:
        site = self._sites.get_by_id(int(site_id))
        if not site:
            raise NotFoundError("Site not found")
        return site

    def create_site(self, *, current_role: Role, data: Mapping[str, Any]) -> Site:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can create sites")

        draft = parse_site_payload(data)
        site_id = self._sites.create(draft)
        logger.info("Created site %s (%s) with %d requirements", site_id, draft.site_name, len(draft.staffing_requirements))
        return self.get_site(site_id)

    def update_site(self, *, current_role: Role, site_id: int, data: Mapping[str, Any]) -> Site:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can edit sites")

        draft = parse_site_payload(data)
        if not self._sites.update(int(site_id), draft):
            raise NotFoundError("Site not found")
        logger.info("Updated site %s", site_id)
        return self.get_site(site_id)

    def delete_site(self, *, current_role: Role, site_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can delete sites")

        if not self._sites.delete_by_id(int(site_id)):
            raise NotFoundError("Site not found")
        logger.info("Deleted site %s", site_id)
