from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import require_non_empty, require_positive
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError
from ..sites.repository import SiteRepository
from .model import UtilityCharge, UtilityChargeDraft
from .repository import UtilityChargeRepository

logger = logging.getLogger(__name__)


class UtilityChargeService:
    """Per-site utility charges. Removing a charge only deactivates it."""

    def __init__(self, charges: UtilityChargeRepository, sites: SiteRepository):
        self._charges = charges
        self._sites = sites

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can manage utility charges")

    def list_charges(self, *, site_id: Optional[int] = None) -> Sequence[UtilityCharge]:
        if site_id is not None and not self._sites.get_by_id(int(site_id)):
            raise NotFoundError("Site not found")
        return self._charges.list_active(site_id=site_id)

    def create_charge(self, *, current_role: Role, site_id: int, data: Mapping[str, Any]) -> UtilityCharge:
        self._require_admin(current_role)
        if not self._sites.get_by_id(int(site_id)):
            raise NotFoundError("Site not found")

        draft = UtilityChargeDraft(
            site_id=int(site_id),
            description=require_non_empty(data.get("description"), "Description"),
            amount=require_positive(data.get("amount"), "Amount"),
        )
        charge_id = self._charges.create(draft)
        logger.info("Added utility charge %s (%s) to site %s", charge_id, draft.description, draft.site_id)
        return self._charges.get_by_id(charge_id)

    def update_charge(self, *, current_role: Role, charge_id: int, data: Mapping[str, Any]) -> UtilityCharge:
        self._require_admin(current_role)
        current = self._charges.get_by_id(int(charge_id))
        if not current or not current.is_active:
            raise NotFoundError("Utility charge not found")

        description = current.description
        if "description" in data:
            description = require_non_empty(data.get("description"), "Description")
        amount = current.amount
        if "amount" in data:
            amount = require_positive(data.get("amount"), "Amount")

        if not self._charges.update(current.charge_id, description=description, amount=amount):
            raise NotFoundError("Utility charge not found")
        return self._charges.get_by_id(current.charge_id)

    def remove_charge(self, *, current_role: Role, charge_id: int) -> None:
        self._require_admin(current_role)
        if not self._charges.deactivate(int(charge_id)):
            raise NotFoundError("Utility charge not found")
        logger.info("Deactivated utility charge %s", charge_id)
