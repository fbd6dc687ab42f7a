from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import GstType, InvoiceStatus


@dataclass(frozen=True)
class InvoiceLineItem:
    item_id: str
    role: str
    quantity: float
    rate_per_slot: float
    line_total: float
    description: str
    shift_type: Optional[str] = None


@dataclass(frozen=True)
class TaxBreakdown:
    """Tax figures of one invoice. `total_amount` is what the client is charged."""

    gst_type: GstType
    subtotal: float
    gst_rate: float = 0.0
    gst_amount: float = 0.0
    cgst_rate: float = 0.0
    cgst_amount: float = 0.0
    sgst_rate: float = 0.0
    sgst_amount: float = 0.0
    igst_rate: float = 0.0
    igst_amount: float = 0.0
    total_amount: float = 0.0


@dataclass(frozen=True)
class InvoiceDraft:
    invoice_number: str
    site_id: Optional[int]
    site_name: str
    site_gst: Optional[str]
    company_name: str
    company_gst: str
    client_name: str
    client_address: str
    invoice_date: date
    period_from: date
    period_to: date
    line_items: tuple[InvoiceLineItem, ...]
    tax: TaxBreakdown
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: Optional[str] = None


@dataclass(frozen=True)
class Invoice:
    """Write-once snapshot of computed charges; only status and notes change."""

    invoice_id: int
    invoice_number: str
    site_id: Optional[int]
    site_name: str
    site_gst: Optional[str]
    company_name: str
    company_gst: str
    client_name: str
    client_address: str
    invoice_date: date
    period_from: date
    period_to: date
    line_items: tuple[InvoiceLineItem, ...]
    tax: TaxBreakdown
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: Optional[str] = None

    @property
    def subtotal(self) -> float:
        return self.tax.subtotal

    @property
    def total_amount(self) -> float:
        return self.tax.total_amount


@dataclass
class AutoGenerateResult:
    created: list[Invoice] = field(default_factory=list)
    skipped_site_ids: list[int] = field(default_factory=list)
