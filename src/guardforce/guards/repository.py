from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import GuardStatus, GuardType
from .model import Guard


class GuardRepository(Protocol):
    def list_all(self) -> Sequence[Guard]:
        raise NotImplementedError

    def get_by_id(self, guard_id: int) -> Optional[Guard]:
        raise NotImplementedError

    def get_by_badge(self, badge_number: str) -> Optional[Guard]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        badge_number: str,
        email: str,
        phone: str,
        status: GuardStatus,
        guard_type: GuardType,
        pay_rate: float,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        guard_id: int,
        name: str,
        badge_number: str,
        email: str,
        phone: str,
        status: GuardStatus,
        guard_type: GuardType,
        pay_rate: float,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, guard_id: int) -> bool:
        raise NotImplementedError
