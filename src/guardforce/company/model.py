from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.constants import DEFAULT_COMPANY_NAME


@dataclass(frozen=True)
class CompanySettings:
    """Letterhead data printed on invoices (single row)."""

    company_name: str = DEFAULT_COMPANY_NAME
    company_motto: Optional[str] = None
    company_address_line1: Optional[str] = None
    company_address_line2: Optional[str] = None
    company_address_line3: Optional[str] = None
    company_phone: Optional[str] = None
    company_email: Optional[str] = None
    company_website: Optional[str] = None
    gst_number: Optional[str] = None
    pan_number: Optional[str] = None
    personal_billing_names: tuple[str, ...] = field(default_factory=tuple)
