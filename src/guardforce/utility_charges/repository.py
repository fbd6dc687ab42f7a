from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import UtilityCharge, UtilityChargeDraft


class UtilityChargeRepository(Protocol):
    def list_active(self, *, site_id: Optional[int] = None) -> Sequence[UtilityCharge]:
        raise NotImplementedError

    def get_by_id(self, charge_id: int) -> Optional[UtilityCharge]:
        raise NotImplementedError

    def create(self, draft: UtilityChargeDraft) -> int:
        raise NotImplementedError

    def update(self, charge_id: int, *, description: str, amount: float) -> bool:
        raise NotImplementedError

    def deactivate(self, charge_id: int) -> bool:
        """Soft delete: the row stays, `is_active` becomes false."""
        raise NotImplementedError
