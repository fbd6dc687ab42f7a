from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import InvoiceStatus
from .model import Invoice, InvoiceDraft


class InvoiceRepository(Protocol):
    def list_all(self) -> Sequence[Invoice]:
        """Newest first."""

        raise NotImplementedError

    def get_by_id(self, invoice_id: int) -> Optional[Invoice]:
        raise NotImplementedError

    def list_numbers_with_prefix(self, prefix: str) -> Sequence[str]:
        raise NotImplementedError

    def site_ids_with_period_starting(self, start: date, end: date) -> set[int]:
        """Sites having an invoice whose period_from falls in [start, end]."""

        raise NotImplementedError

    def create(self, draft: InvoiceDraft) -> int:
        raise NotImplementedError

    def update_status_notes(
        self,
        invoice_id: int,
        *,
        status: InvoiceStatus,
        notes: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, invoice_id: int) -> bool:
        raise NotImplementedError
