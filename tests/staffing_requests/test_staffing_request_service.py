from __future__ import annotations

from datetime import date

import pytest

from fakes import FakeSiteRepo, FakeStaffingRequestRepo
from guardforce.core.enums import GstType, Role, StaffingRequestStatus
from guardforce.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from guardforce.sites.model import Site
from guardforce.staffing_requests.service import StaffingRequestService


@pytest.fixture
def service():
    site = Site(1, "Mall", "Acme", "", GstType.GST, "Road")
    return StaffingRequestService(FakeStaffingRequestRepo(), FakeSiteRepo([site]))


def _payload(**overrides):
    data = {"site_id": 1, "request_date": "2025-01-20", "day_temp_slots": 2, "night_temp_slots": 0, "day_slot_pay_rate": 800}
    data.update(overrides)
    return data


def test_create_request_is_pending(service):
    row = service.create_request(current_role=Role.SUPERVISOR, requested_by="Sam", data=_payload(notes=" festival "))

    assert row.status == StaffingRequestStatus.PENDING
    assert row.request_date == date(2025, 1, 20)
    assert row.day_slot_pay_rate == 800.0
    assert row.night_slot_pay_rate is None
    assert row.notes == "festival"
    assert row.requested_by == "Sam"


@pytest.mark.parametrize(
    "overrides",
    [
        {"site_id": None},
        {"request_date": ""},
        {"request_date": "20-01-2025"},
        {"day_temp_slots": 0, "night_temp_slots": 0},
        {"night_temp_slots": -1},
        {"day_slot_pay_rate": -5},
    ],
)
def test_create_request_validation(service, overrides):
    with pytest.raises(ValidationError):
        service.create_request(current_role=Role.ADMIN, requested_by="Asha", data=_payload(**overrides))


def test_create_request_unknown_site(service):
    with pytest.raises(NotFoundError):
        service.create_request(current_role=Role.ADMIN, requested_by="Asha", data=_payload(site_id=5))


def test_status_is_written_without_transition_checks(service):
    row = service.create_request(current_role=Role.ADMIN, requested_by="Asha", data=_payload())

    fulfilled = service.set_status(current_role=Role.ADMIN, request_id=row.request_id, status=StaffingRequestStatus.FULFILLED)
    back = service.set_status(current_role=Role.ADMIN, request_id=row.request_id, status=StaffingRequestStatus.PENDING)

    assert fulfilled.status == StaffingRequestStatus.FULFILLED
    assert back.status == StaffingRequestStatus.PENDING
    assert [r.request_id for r in service.list_requests(status=StaffingRequestStatus.PENDING)] == [row.request_id]


def test_status_changes_are_admin_only(service):
    row = service.create_request(current_role=Role.ADMIN, requested_by="Asha", data=_payload())

    with pytest.raises(AuthorizationError):
        service.set_status(current_role=Role.SUPERVISOR, request_id=row.request_id, status=StaffingRequestStatus.APPROVED)
    with pytest.raises(NotFoundError):
        service.set_status(current_role=Role.ADMIN, request_id=99, status=StaffingRequestStatus.APPROVED)
