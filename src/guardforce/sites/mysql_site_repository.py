from __future__ import annotations

from collections import defaultdict
from typing import Optional, Sequence

from ..core.enums import GstType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import Site, SiteDraft, StaffingRequirement
from .repository import SiteRepository

_SITE_COLUMNS = """
    site_id, site_name, organization_name, gst_number, gst_type,
    address_line1, address_line2, address_line3, site_category, personal_billing_name
"""


def _requirement_from_row(r: dict) -> StaffingRequirement:
    return StaffingRequirement(
        requirement_id=int(r["requirement_id"]),
        site_id=int(r["site_id"]),
        role_type=r["role_type"],
        budget_per_slot=to_float(r["budget_per_slot"]) or 0.0,
        day_slots=int(r["day_slots"] or 0),
        night_slots=int(r["night_slots"] or 0),
    )


def _site_from_row(r: dict, requirements: Sequence[StaffingRequirement]) -> Site:
    return Site(
        site_id=int(r["site_id"]),
        site_name=r["site_name"],
        organization_name=r["organization_name"],
        gst_number=r.get("gst_number") or "",
        gst_type=GstType(r["gst_type"]),
        address_line1=r.get("address_line1") or "",
        address_line2=r.get("address_line2"),
        address_line3=r.get("address_line3"),
        site_category=r.get("site_category") or "",
        personal_billing_name=r.get("personal_billing_name"),
        staffing_requirements=tuple(requirements),
    )


class MySQLSiteRepository(SiteRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SITE_COLUMNS} FROM sites ORDER BY created_at DESC, site_id DESC")
            site_rows = fetchall(cur)
            cur.execute(
                """
                SELECT requirement_id, site_id, role_type, budget_per_slot, day_slots, night_slots
                FROM staffing_requirements
                ORDER BY requirement_id
                """
            )
            by_site: dict[int, list[StaffingRequirement]] = defaultdict(list)
            for r in fetchall(cur):
                by_site[int(r["site_id"])].append(_requirement_from_row(r))

            return [_site_from_row(r, by_site.get(int(r["site_id"]), [])) for r in site_rows]

    def get_by_id(self, site_id: int) -> Optional[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SITE_COLUMNS} FROM sites WHERE site_id=%s", (int(site_id),))
            r = fetchone(cur)
            if not r:
                return None
        return _site_from_row(r, self.list_requirements(site_id))

    def list_requirements(self, site_id: int) -> Sequence[StaffingRequirement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT requirement_id, site_id, role_type, budget_per_slot, day_slots, night_slots
                FROM staffing_requirements
                WHERE site_id=%s
                ORDER BY requirement_id
                """,
                (int(site_id),),
            )
            return [_requirement_from_row(r) for r in fetchall(cur)]

    def create(self, draft: SiteDraft) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sites(
                    site_name, organization_name, gst_number, gst_type, address,
                    address_line1, address_line2, address_line3, site_category, personal_billing_name
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    draft.site_name,
                    draft.organization_name,
                    draft.gst_number,
                    draft.gst_type.value,
                    draft.address,
                    draft.address_line1,
                    draft.address_line2,
                    draft.address_line3,
                    draft.site_category,
                    draft.personal_billing_name,
                ),
            )
            site_id = int(cur.lastrowid)
            self._insert_requirements(cur, site_id, draft.staffing_requirements)
            return site_id

    def update(self, site_id: int, draft: SiteDraft) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE sites
                SET site_name=%s, organization_name=%s, gst_number=%s, gst_type=%s, address=%s,
                    address_line1=%s, address_line2=%s, address_line3=%s,
                    site_category=%s, personal_billing_name=%s
                WHERE site_id=%s
                """,
                (
                    draft.site_name,
                    draft.organization_name,
                    draft.gst_number,
                    draft.gst_type.value,
                    draft.address,
                    draft.address_line1,
                    draft.address_line2,
                    draft.address_line3,
                    draft.site_category,
                    draft.personal_billing_name,
                    int(site_id),
                ),
            )
            cur.execute("SELECT 1 AS found FROM sites WHERE site_id=%s", (int(site_id),))
            if not fetchone(cur):
                return False
            cur.execute("DELETE FROM staffing_requirements WHERE site_id=%s", (int(site_id),))
            self._insert_requirements(cur, int(site_id), draft.staffing_requirements)
            return True

    def delete_by_id(self, site_id: int) -> bool:
        # staffing_requirements and shifts cascade
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sites WHERE site_id=%s", (int(site_id),))
            return cur.rowcount > 0

    @staticmethod
    def _insert_requirements(cur, site_id: int, requirements: Sequence[StaffingRequirement]) -> None:
        if not requirements:
            return
        cur.executemany(
            """
            INSERT INTO staffing_requirements(site_id, role_type, budget_per_slot, day_slots, night_slots)
            VALUES(%s,%s,%s,%s,%s)
            """,
            [(site_id, r.role_type, r.budget_per_slot, r.day_slots, r.night_slots) for r in requirements],
        )
