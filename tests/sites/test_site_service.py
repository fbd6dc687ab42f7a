from __future__ import annotations

import pytest

from fakes import FakeSiteRepo
from guardforce.core.enums import GstType, Role
from guardforce.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from guardforce.sites.service import SiteService, parse_site_payload


def _payload(**overrides):
    data = {
        "site_name": "Corporate Office Complex",
        "organization_name": "TechCorp Industries",
        "gst_number": "29AAACT1234A1Z5",
        "gst_type": "GST",
        "address_line1": "123 Business District",
        "address_line2": "",
        "address_line3": "Bangalore",
        "site_category": "Corporate",
        "staffing_requirements": [
            {"role_type": "Security Guard", "budget_per_slot": 1500, "day_slots": 10, "night_slots": 8},
            {"role_type": "Supervisor", "budget_per_slot": "2500", "day_slots": "2", "night_slots": 0},
        ],
    }
    data.update(overrides)
    return data


@pytest.fixture
def service():
    return SiteService(FakeSiteRepo())


def test_parse_site_payload_joins_address_and_totals_slots():
    draft = parse_site_payload(_payload())

    assert draft.address == "123 Business District, Bangalore"
    assert draft.address_line2 is None
    assert [r.day_slots for r in draft.staffing_requirements] == [10, 2]
    assert draft.staffing_requirements[1].budget_per_slot == 2500.0


@pytest.mark.parametrize(
    "overrides",
    [
        {"site_name": " "},
        {"address_line1": None},
        {"gst_type": "IGST"},
        {"gst_type": "VAT"},
        {"staffing_requirements": [{"role_type": "Guard", "day_slots": -1}]},
        {"staffing_requirements": [{"role_type": "", "day_slots": 1}]},
        {"staffing_requirements": [{"role_type": "Guard", "budget_per_slot": -10}]},
        {"staffing_requirements": [{"role_type": "Guard", "budget_per_slot": "nan", "day_slots": 1}]},
        {"staffing_requirements": [{"role_type": "Guard", "budget_per_slot": "inf", "day_slots": 1}]},
        {"staffing_requirements": [{"role_type": 7, "day_slots": 1}]},
        {"staffing_requirements": ["Guard"]},
        {"staffing_requirements": "Guard x 2"},
        {"site_name": 12},
        {"gst_number": 29},
    ],
)
def test_parse_site_payload_rejects_invalid_input(overrides):
    with pytest.raises(ValidationError):
        parse_site_payload(_payload(**overrides))


def test_create_and_get_site(service):
    site = service.create_site(current_role=Role.ADMIN, data=_payload())

    assert site.site_id == 1
    assert site.gst_type == GstType.GST
    assert (site.day_slots, site.night_slots) == (12, 8)
    assert service.get_site(1) == site


def test_update_replaces_requirements_wholesale(service):
    service.create_site(current_role=Role.ADMIN, data=_payload())

    updated = service.update_site(
        current_role=Role.ADMIN,
        site_id=1,
        data=_payload(
            gst_type="PERSONAL",
            personal_billing_name="Mr. Rao",
            staffing_requirements=[{"role_type": "Gunman", "budget_per_slot": 3000, "day_slots": 1, "night_slots": 1}],
        ),
    )

    assert [r.role_type for r in updated.staffing_requirements] == ["Gunman"]
    assert updated.personal_billing_name == "Mr. Rao"


def test_only_admin_manages_sites(service):
    with pytest.raises(AuthorizationError):
        service.create_site(current_role=Role.SUPERVISOR, data=_payload())
    with pytest.raises(AuthorizationError):
        service.delete_site(current_role=Role.GUARD, site_id=1)


def test_missing_site(service):
    with pytest.raises(NotFoundError):
        service.get_site(7)
    with pytest.raises(NotFoundError):
        service.update_site(current_role=Role.ADMIN, site_id=7, data=_payload())
    with pytest.raises(NotFoundError):
        service.delete_site(current_role=Role.ADMIN, site_id=7)
