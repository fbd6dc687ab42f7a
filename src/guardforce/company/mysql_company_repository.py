from __future__ import annotations

import json
from dataclasses import asdict
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import CompanySettings
from .repository import CompanySettingsRepository

_FIELDS = (
    "company_name",
    "company_motto",
    "company_address_line1",
    "company_address_line2",
    "company_address_line3",
    "company_phone",
    "company_email",
    "company_website",
    "gst_number",
    "pan_number",
)


class MySQLCompanySettingsRepository(CompanySettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self) -> Optional[CompanySettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {", ".join(_FIELDS)}, personal_billing_names
                FROM company_settings
                ORDER BY settings_id
                LIMIT 1
                """
            )
            r = fetchone(cur)
            if not r:
                return None
            names = r.get("personal_billing_names")
            if isinstance(names, (bytes, str)):
                names = json.loads(names)
            return CompanySettings(
                **{f: r.get(f) for f in _FIELDS},
                personal_billing_names=tuple(names or ()),
            )

    def save(self, settings: CompanySettings) -> None:
        values = asdict(settings)
        params = [values[f] for f in _FIELDS] + [json.dumps(list(settings.personal_billing_names))]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT settings_id FROM company_settings ORDER BY settings_id LIMIT 1")
            existing = fetchone(cur)
            if existing:
                assignments = ", ".join(f"{f}=%s" for f in _FIELDS)
                cur.execute(
                    f"UPDATE company_settings SET {assignments}, personal_billing_names=%s WHERE settings_id=%s",
                    (*params, int(existing["settings_id"])),
                )
            else:
                cur.execute(
                    f"""
                    INSERT INTO company_settings({", ".join(_FIELDS)}, personal_billing_names)
                    VALUES({", ".join(["%s"] * (len(_FIELDS) + 1))})
                    """,
                    tuple(params),
                )
