from __future__ import annotations

import pytest

from fakes import FakeGuardRepo
from guardforce.core.enums import GuardStatus, GuardType, Role
from guardforce.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from guardforce.guards.service import GuardService


@pytest.fixture
def service():
    return GuardService(FakeGuardRepo())


def _guard(**overrides):
    data = {"name": "Ravi Kumar", "badge_number": "SG-001", "phone": "98450 00000", "pay_rate": "650"}
    data.update(overrides)
    return data


def test_create_guard_with_defaults(service):
    guard = service.create_guard(current_role=Role.ADMIN, data=_guard())

    assert guard.status == GuardStatus.ACTIVE
    assert guard.guard_type == GuardType.PERMANENT
    assert guard.pay_rate == 650.0


def test_badge_numbers_are_unique(service):
    first = service.create_guard(current_role=Role.ADMIN, data=_guard())
    second = service.create_guard(current_role=Role.ADMIN, data=_guard(name="Meena", badge_number="SG-002"))

    with pytest.raises(ValidationError):
        service.create_guard(current_role=Role.ADMIN, data=_guard(name="Copy"))
    with pytest.raises(ValidationError):
        service.update_guard(current_role=Role.ADMIN, guard_id=second.guard_id, data=_guard(name="Meena"))

    same = service.update_guard(current_role=Role.ADMIN, guard_id=first.guard_id, data=_guard(status="inactive"))
    assert same.status == GuardStatus.INACTIVE


def test_list_filters_by_status(service):
    service.create_guard(current_role=Role.ADMIN, data=_guard())
    service.create_guard(current_role=Role.ADMIN, data=_guard(badge_number="SG-002", status="inactive"))

    assert [g.badge_number for g in service.list_guards(status=GuardStatus.ACTIVE)] == ["SG-001"]
    assert len(service.list_guards()) == 2


def test_validation_and_roles(service):
    with pytest.raises(ValidationError):
        service.create_guard(current_role=Role.ADMIN, data=_guard(pay_rate=-1))
    with pytest.raises(ValidationError):
        service.create_guard(current_role=Role.ADMIN, data=_guard(guard_type="contract"))
    with pytest.raises(AuthorizationError):
        service.create_guard(current_role=Role.SUPERVISOR, data=_guard())
    with pytest.raises(NotFoundError):
        service.delete_guard(current_role=Role.ADMIN, guard_id=99)
