from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import optional_text, parse_enum, require_non_empty, to_number
from ..core.enums import GuardStatus, GuardType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Guard
from .repository import GuardRepository

logger = logging.getLogger(__name__)


class GuardService:
    """Use case: manage the guard roll."""

    def __init__(self, guards: GuardRepository):
        self._guards = guards

    def list_guards(self, *, status: Optional[GuardStatus] = None) -> Sequence[Guard]:
        guards = self._guards.list_all()
        if status is not None:
            guards = [g for g in guards if g.status == status]
        return guards

    def get_guard(self, guard_id: int) -> Guard:
        guard = self._guards.get_by_id(int(guard_id))
        if not guard:
            raise NotFoundError("Guard not found")
        return guard

    def _parse(self, data: Mapping[str, Any]) -> dict:
        pay_rate = to_number(data.get("pay_rate") or 0, "Pay rate")
        if pay_rate < 0:
            raise ValidationError("Pay rate cannot be negative")
        return {
            "name": require_non_empty(data.get("name"), "Name"),
            "badge_number": require_non_empty(data.get("badge_number"), "Badge number"),
            "email": optional_text(data.get("email"), "Email"),
            "phone": optional_text(data.get("phone"), "Phone"),
            "status": parse_enum(GuardStatus, data.get("status") or GuardStatus.ACTIVE.value, "Status"),
            "guard_type": parse_enum(GuardType, data.get("guard_type") or GuardType.PERMANENT.value, "Guard type"),
            "pay_rate": pay_rate,
        }

    def create_guard(self, *, current_role: Role, data: Mapping[str, Any]) -> Guard:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can add guards")

        fields = self._parse(data)
        if self._guards.get_by_badge(fields["badge_number"]):
            raise ValidationError("Badge number already in use")

        guard_id = self._guards.create(**fields)
        logger.info("Created guard %s (badge %s)", guard_id, fields["badge_number"])
        return self.get_guard(guard_id)

    def update_guard(self, *, current_role: Role, guard_id: int, data: Mapping[str, Any]) -> Guard:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can edit guards")

        fields = self._parse(data)
        other = self._guards.get_by_badge(fields["badge_number"])
        if other and other.guard_id != int(guard_id):
            raise ValidationError("Badge number already in use")

        if not self._guards.update(guard_id=int(guard_id), **fields):
            raise NotFoundError("Guard not found")
        return self.get_guard(guard_id)

    def delete_guard(self, *, current_role: Role, guard_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can delete guards")

        if not self._guards.delete_by_id(int(guard_id)):
            raise NotFoundError("Guard not found")
        logger.info("Deleted guard %s", guard_id)
