from __future__ import annotations

import logging
from typing import Any, Mapping

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from .model import CompanySettings
from .repository import CompanySettingsRepository

logger = logging.getLogger(__name__)


def _clean(value: Any):
    if value is None:
        return None
    return str(value).strip() or None


class CompanySettingsService:
    def __init__(self, settings: CompanySettingsRepository):
        self._settings = settings

    def get_settings(self) -> CompanySettings:
        """Stored settings, or defaults before the first save."""
        return self._settings.get() or CompanySettings()

    def update_settings(self, *, current_role: Role, data: Mapping[str, Any]) -> CompanySettings:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can edit company settings")

        names = data.get("personal_billing_names") or []
        if not isinstance(names, list):
            raise ValidationError("personal_billing_names must be a list")

        settings = CompanySettings(
            company_name=require_non_empty(data.get("company_name"), "Company name"),
            company_motto=_clean(data.get("company_motto")),
            company_address_line1=_clean(data.get("company_address_line1")),
            company_address_line2=_clean(data.get("company_address_line2")),
            company_address_line3=_clean(data.get("company_address_line3")),
            company_phone=_clean(data.get("company_phone")),
            company_email=_clean(data.get("company_email")),
            company_website=_clean(data.get("company_website")),
            gst_number=_clean(data.get("gst_number")),
            pan_number=_clean(data.get("pan_number")),
            personal_billing_names=tuple(n for n in (_clean(x) for x in names) if n),
        )
        self._settings.save(settings)
        logger.info("Company settings updated (%s)", settings.company_name)
        return settings
