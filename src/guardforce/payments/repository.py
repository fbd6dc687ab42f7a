from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PaymentDraft, PaymentRecord


class PaymentRepository(Protocol):
    def list_all(self, *, guard_id: Optional[int] = None, month: Optional[str] = None) -> Sequence[PaymentRecord]:
        raise NotImplementedError

    def get_by_id(self, payment_id: int) -> Optional[PaymentRecord]:
        raise NotImplementedError

    def create(self, draft: PaymentDraft) -> int:
        raise NotImplementedError

    def update(self, payment_id: int, draft: PaymentDraft) -> bool:
        raise NotImplementedError

    def delete_by_id(self, payment_id: int) -> bool:
        raise NotImplementedError
