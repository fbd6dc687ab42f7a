from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import format_month, parse_iso_date, parse_month, today_local
from ..common.validators import optional_text, parse_enum, require_positive
from ..core.enums import PaymentType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..guards.repository import GuardRepository
from .model import PaymentDraft, PaymentRecord
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


def normalize_month(value: Any) -> str:
    return format_month(*parse_month(value))


def parse_payment_payload(data: Mapping[str, Any], *, base: Optional[PaymentRecord] = None) -> PaymentDraft:
    """Build a draft from a payload; fields missing from it fall back to `base`.

    The pay month defaults to the month of the payment date.
    """

    def pick(key: str, fallback):
        return data[key] if key in data else fallback

    raw_guard = pick("guard_id", base.guard_id if base else None)
    if raw_guard in (None, ""):
        raise ValidationError("Guard is required")
    try:
        guard_id = int(raw_guard)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError("Guard must be an id")

    if "payment_date" in data:
        payment_date = parse_iso_date(data["payment_date"])
    elif base:
        payment_date = base.payment_date
    else:
        payment_date = today_local()

    payment_type = parse_enum(PaymentType, pick("payment_type", base.payment_type.value if base else None), "Payment type")
    amount = require_positive(pick("amount", base.amount if base else None), "Amount")

    raw_month = pick("month", base.month if base else None)
    month = normalize_month(raw_month) if raw_month else format_month(payment_date.year, payment_date.month)

    if "note" in data:
        note = optional_text(data["note"], "Note") or None
    else:
        note = base.note if base else None

    return PaymentDraft(
        guard_id=guard_id,
        payment_date=payment_date,
        amount=amount,
        payment_type=payment_type,
        month=month,
        note=note,
    )


class PaymentService:
    """Use case: bonuses and deductions recorded against guards (admin only)."""

    def __init__(self, payments: PaymentRepository, guards: GuardRepository):
        self._payments = payments
        self._guards = guards

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can manage payments")

    def list_payments(
        self,
        *,
        current_role: Role,
        guard_id: Optional[int] = None,
        month: Optional[str] = None,
    ) -> Sequence[PaymentRecord]:
        self._require_admin(current_role)
        if guard_id is not None and not self._guards.get_by_id(int(guard_id)):
            raise NotFoundError("Guard not found")
        return self._payments.list_all(
            guard_id=int(guard_id) if guard_id is not None else None,
            month=normalize_month(month) if month else None,
        )

    def get_payment(self, *, current_role: Role, payment_id: int) -> PaymentRecord:
        self._require_admin(current_role)
        payment = self._payments.get_by_id(int(payment_id))
        if not payment:
            raise NotFoundError("Payment record not found")
        return payment

    def create_payment(self, *, current_role: Role, data: Mapping[str, Any]) -> PaymentRecord:
        self._require_admin(current_role)
        draft = parse_payment_payload(data)
        if not self._guards.get_by_id(draft.guard_id):
            raise NotFoundError("Guard not found")

        payment_id = self._payments.create(draft)
        logger.info(
            "Recorded %s of %.2f for guard %s (%s)", draft.payment_type.value, draft.amount, draft.guard_id, draft.month
        )
        return self._payments.get_by_id(payment_id)

    def update_payment(self, *, current_role: Role, payment_id: int, data: Mapping[str, Any]) -> PaymentRecord:
        current = self.get_payment(current_role=current_role, payment_id=payment_id)
        draft = parse_payment_payload(data, base=current)
        if draft.guard_id != current.guard_id and not self._guards.get_by_id(draft.guard_id):
            raise NotFoundError("Guard not found")

        if not self._payments.update(current.payment_id, draft):
            raise NotFoundError("Payment record not found")
        return self._payments.get_by_id(current.payment_id)

    def delete_payment(self, *, current_role: Role, payment_id: int) -> None:
        self._require_admin(current_role)
        if not self._payments.delete_by_id(int(payment_id)):
            raise NotFoundError("Payment record not found")
        logger.info("Deleted payment record %s", payment_id)

    def monthly_net(self, *, current_role: Role, guard_id: int, month: str) -> float:
        """Bonuses minus deductions for one guard in one pay month."""
        rows = self.list_payments(current_role=current_role, guard_id=guard_id, month=month)
        return round(sum(p.signed_amount for p in rows), 2)
