from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import GuardStatus, GuardType


@dataclass(frozen=True)
class Guard:
    """Domain entity: a security guard on the company roll."""

    guard_id: int
    name: str
    badge_number: str
    email: str = ""
    phone: str = ""
    status: GuardStatus = GuardStatus.ACTIVE
    guard_type: GuardType = GuardType.PERMANENT
    pay_rate: float = 0.0
