from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import PaymentType


@dataclass(frozen=True)
class PaymentRecord:
    """Bonus or deduction for a guard, tracked against a pay month (YYYY-MM)."""

    payment_id: int
    guard_id: int
    payment_date: date
    amount: float
    payment_type: PaymentType
    month: str
    note: Optional[str] = None

    @property
    def signed_amount(self) -> float:
        return -self.amount if self.payment_type == PaymentType.DEDUCTION else self.amount


@dataclass(frozen=True)
class PaymentDraft:
    guard_id: int
    payment_date: date
    amount: float
    payment_type: PaymentType
    month: str
    note: Optional[str] = None
