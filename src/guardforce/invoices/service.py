from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import month_bounds, parse_iso_date, parse_optional_date, today_local
from ..common.validators import (
    optional_text,
    parse_enum,
    require_list,
    require_mapping,
    require_non_empty,
    to_number,
)
from ..company.service import CompanySettingsService
from ..core.constants import INVOICE_NUMBER_PREFIX
from ..core.enums import GstType, InvoiceStatus, Role, ShiftType
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..sites.model import Site, join_address
from ..sites.repository import SiteRepository
from .model import AutoGenerateResult, Invoice, InvoiceDraft, InvoiceLineItem
from .repository import InvoiceRepository
from .tax import TaxPolicyFactory

logger = logging.getLogger(__name__)


def line_items_for_site(site: Site) -> list[InvoiceLineItem]:
    """One item per non-zero day/night slot count of each staffing requirement."""
    items = []
    for idx, req in enumerate(site.staffing_requirements, start=1):
        ref = req.requirement_id if req.requirement_id is not None else idx
        for shift_type, count in ((ShiftType.DAY, req.day_slots), (ShiftType.NIGHT, req.night_slots)):
            if count <= 0:
                continue
            label = "Day" if shift_type == ShiftType.DAY else "Night"
            items.append(
                InvoiceLineItem(
                    item_id=f"{ref}-{shift_type.value}",
                    role=req.role_type,
                    shift_type=shift_type.value,
                    quantity=count,
                    rate_per_slot=req.budget_per_slot,
                    line_total=count * req.budget_per_slot,
                    description=f"{req.role_type} - {label} Shift",
                )
            )
    return items


def _check_period(period_from: date, period_to: date) -> None:
    if period_from > period_to:
        raise ValidationError("Billing period start must not be after its end")


class InvoiceService:
    """Use case: build, store and track invoices.

    Note:
    - Tax figures are computed once at creation and never recomputed.
    - Only status and notes can change afterwards.
    """

    def __init__(
        self,
        invoices: InvoiceRepository,
        sites: SiteRepository,
        company: CompanySettingsService,
        *,
        tax_factory: Optional[TaxPolicyFactory] = None,
    ):
        self._invoices = invoices
        self._sites = sites
        self._company = company
        self._tax = tax_factory or TaxPolicyFactory()

    def _require_admin(self, current_role: Role, action: str) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError(f"Only admins can {action}")

    def next_invoice_number(self, on_date: date) -> str:
        """INV-YYYYMMDD-NNN, numbered per invoice date."""
        prefix = f"{INVOICE_NUMBER_PREFIX}-{on_date.strftime('%Y%m%d')}-"
        used = []
        for number in self._invoices.list_numbers_with_prefix(prefix):
            suffix = number[len(prefix):]
            if suffix.isdigit():
                used.append(int(suffix))
        return f"{prefix}{max(used, default=0) + 1:03d}"

    def list_invoices(self, *, status: Optional[InvoiceStatus] = None) -> Sequence[Invoice]:
        invoices = self._invoices.list_all()
        if status is not None:
            invoices = [i for i in invoices if i.status == status]
        return invoices

    def get_invoice(self, invoice_id: int) -> Invoice:
        invoice = self._invoices.get_by_id(int(invoice_id))
        if not invoice:
            raise NotFoundError("Invoice not found")
        return invoice

    def _store(self, draft: InvoiceDraft) -> Invoice:
        invoice_id = self._invoices.create(draft)
        logger.info(
            "Created invoice %s (%s) for %s: %.2f",
            draft.invoice_number,
            draft.tax.gst_type.value,
            draft.site_name,
            draft.tax.total_amount,
        )
        return self.get_invoice(invoice_id)

    def _draft_from_site(
        self,
        site: Site,
        *,
        period_from: date,
        period_to: date,
        invoice_date: date,
        notes: Optional[str],
    ) -> Optional[InvoiceDraft]:
        items = line_items_for_site(site)
        if not items:
            return None

        company = self._company.get_settings()
        subtotal = sum(i.line_total for i in items)
        client_name = site.organization_name
        if site.gst_type == GstType.PERSONAL and site.personal_billing_name:
            client_name = site.personal_billing_name

        return InvoiceDraft(
            invoice_number=self.next_invoice_number(invoice_date),
            site_id=site.site_id,
            site_name=site.site_name,
            site_gst=site.gst_number or None,
            company_name=company.company_name,
            company_gst=company.gst_number or "",
            client_name=client_name,
            client_address=site.address,
            invoice_date=invoice_date,
            period_from=period_from,
            period_to=period_to,
            line_items=tuple(items),
            tax=self._tax.for_type(site.gst_type).compute(subtotal),
            notes=notes,
        )

    def create_from_site(
        self,
        *,
        current_role: Role,
        site_id: int,
        period_from: date,
        period_to: date,
        invoice_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> Invoice:
        self._require_admin(current_role, "create invoices")
        _check_period(period_from, period_to)

        site = self._sites.get_by_id(int(site_id))
        if not site:
            raise NotFoundError("Site not found")

        draft = self._draft_from_site(
            site,
            period_from=period_from,
            period_to=period_to,
            invoice_date=invoice_date or today_local(),
            notes=notes,
        )
        if draft is None:
            raise ValidationError(f"Site {site.site_name} has no staffing slots to bill")
        return self._store(draft)

    def create_custom(self, *, current_role: Role, data: Mapping[str, Any]) -> Invoice:
        """Invoice with caller-supplied line items and an explicit regime (IGST allowed)."""
        self._require_admin(current_role, "create invoices")

        gst_type = parse_enum(GstType, data.get("gst_type") or GstType.GST.value, "GST type")
        site_name = require_non_empty(data.get("site_name"), "Site name")
        client_name = require_non_empty(data.get("client_name"), "Client name")
        personal_name = optional_text(data.get("personal_billing_name"), "Personal billing name")
        if gst_type == GstType.PERSONAL and personal_name:
            client_name = personal_name

        period_from = parse_iso_date(data.get("period_from"))
        period_to = parse_iso_date(data.get("period_to"))
        _check_period(period_from, period_to)
        invoice_date = parse_optional_date(data.get("invoice_date"), today_local())

        raw_items = require_list(data.get("line_items"), "Line items")
        if not raw_items:
            raise ValidationError("Add at least one line item")

        items = []
        for idx, raw in enumerate(raw_items, start=1):
            raw = require_mapping(raw, f"Line item #{idx}")
            description = optional_text(raw.get("description"), f"Description of item #{idx}")
            quantity = to_number(raw.get("quantity", 0), f"Quantity of item #{idx}")
            rate = to_number(raw.get("rate_per_slot", 0), f"Rate of item #{idx}")
            if not description or quantity <= 0 or rate <= 0:
                raise ValidationError("Complete all line items with valid quantities and rates")
            items.append(
                InvoiceLineItem(
                    item_id=str(raw.get("item_id") or idx),
                    role=optional_text(raw.get("role"), f"Role of item #{idx}") or description,
                    shift_type=optional_text(raw.get("shift_type"), f"Shift type of item #{idx}") or None,
                    quantity=quantity,
                    rate_per_slot=rate,
                    line_total=quantity * rate,
                    description=description,
                )
            )

        company = self._company.get_settings()
        subtotal = sum(i.line_total for i in items)
        address = join_address(
            optional_text(data.get("address_line1"), "Address line 1"),
            optional_text(data.get("address_line2"), "Address line 2"),
            optional_text(data.get("address_line3"), "Address line 3"),
        )
        draft = InvoiceDraft(
            invoice_number=self.next_invoice_number(invoice_date),
            site_id=None,
            site_name=site_name,
            site_gst=optional_text(data.get("gst_number"), "GST number") or None,
            company_name=company.company_name,
            company_gst=company.gst_number or "",
            client_name=client_name,
            client_address=address or optional_text(data.get("client_address"), "Client address"),
            invoice_date=invoice_date,
            period_from=period_from,
            period_to=period_to,
            line_items=tuple(items),
            tax=self._tax.for_type(gst_type).compute(subtotal),
            notes=optional_text(data.get("notes"), "Notes") or None,
        )
        return self._store(draft)

    def auto_generate_for_month(
        self,
        *,
        current_role: Role,
        year: int,
        month: int,
        invoice_date: Optional[date] = None,
    ) -> AutoGenerateResult:
        """Draft one invoice per billable site not yet invoiced for the month."""
        self._require_admin(current_role, "generate invoices")
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12")

        period_from, period_to = month_bounds(int(year), int(month))
        already = self._invoices.site_ids_with_period_starting(period_from, period_to)
        invoice_date = invoice_date or today_local()

        result = AutoGenerateResult()
        for site in self._sites.list_all():
            if site.site_id in already:
                result.skipped_site_ids.append(site.site_id)
                continue
            draft = self._draft_from_site(
                site,
                period_from=period_from,
                period_to=period_to,
                invoice_date=invoice_date,
                notes=f"Monthly security services for {period_from.strftime('%B %Y')}",
            )
            if draft is None:
                result.skipped_site_ids.append(site.site_id)
                continue
            result.created.append(self._store(draft))

        logger.info(
            "Auto-generated %d invoice(s) for %04d-%02d, skipped %d site(s)",
            len(result.created),
            int(year),
            int(month),
            len(result.skipped_site_ids),
        )
        return result

    def update_invoice(
        self,
        *,
        current_role: Role,
        invoice_id: int,
        status: Optional[InvoiceStatus] = None,
        notes: Optional[str] = None,
    ) -> Invoice:
        """Change status and/or notes. `notes=None` keeps them, an empty string clears them."""
        self._require_admin(current_role, "edit invoices")
        current = self.get_invoice(invoice_id)

        new_notes = current.notes if notes is None else (notes.strip() or None)
        self._invoices.update_status_notes(
            current.invoice_id,
            status=status or current.status,
            notes=new_notes,
        )
        logger.info("Updated invoice %s (status=%s)", current.invoice_number, (status or current.status).value)
        return self.get_invoice(current.invoice_id)

    def delete_invoice(self, *, current_role: Role, invoice_id: int) -> None:
        self._require_admin(current_role, "delete invoices")
        if not self._invoices.delete_by_id(int(invoice_id)):
            raise NotFoundError("Invoice not found")
        logger.info("Deleted invoice %s", invoice_id)
