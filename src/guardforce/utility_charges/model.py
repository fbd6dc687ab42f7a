from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UtilityCharge:
    """Recurring extra charge billed for a site (water, electricity, ...)."""

    charge_id: int
    site_id: int
    description: str
    amount: float
    is_active: bool = True


@dataclass(frozen=True)
class UtilityChargeDraft:
    site_id: int
    description: str
    amount: float
