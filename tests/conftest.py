from __future__ import annotations

from datetime import datetime

import pytest

from fakes import (
    FakeAttendanceRepo,
    FakeCompanyRepo,
    FakeGuardRepo,
    FakeInvoiceRepo,
    FakePaymentRepo,
    FakeShiftRepo,
    FakeSiteRepo,
    FakeStaffingRequestRepo,
    FakeUserRepo,
    FakeUtilityChargeRepo,
)
from guardforce.container import assemble_container
from guardforce.core.enums import Role
from guardforce.main import create_app

# modules that read today_local() through a direct import
_TODAY_USERS = (
    "guardforce.shifts.service",
    "guardforce.shifts.controller",
    "guardforce.attendance.service",
    "guardforce.attendance.controller",
    "guardforce.invoices.service",
    "guardforce.invoices.controller",
    "guardforce.payments.service",
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 15, 9, 0, 0)


@pytest.fixture
def fixed_today(monkeypatch, fixed_now):
    today = fixed_now.date()
    for module in _TODAY_USERS:
        monkeypatch.setattr(f"{module}.today_local", lambda: today)
    return today


@pytest.fixture
def repos():
    return {
        "sites_repo": FakeSiteRepo(),
        "guards_repo": FakeGuardRepo(),
        "shifts_repo": FakeShiftRepo(),
        "attendance_repo": FakeAttendanceRepo(),
        "invoices_repo": FakeInvoiceRepo(),
        "staffing_requests_repo": FakeStaffingRequestRepo(),
        "users_repo": FakeUserRepo(),
        "company_repo": FakeCompanyRepo(),
        "utility_charges_repo": FakeUtilityChargeRepo(),
        "payments_repo": FakePaymentRepo(),
    }


@pytest.fixture
def container(repos):
    return assemble_container(**repos)


@pytest.fixture
def app(container, fixed_today):
    app = create_app(container, settings_module="guardforce.settings.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def sign_in(client, *, role: Role = Role.ADMIN, user_id: int = 1, name: str = "Asha Admin") -> None:
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["name"] = name
        sess["email"] = f"user{user_id}@example.com"
        sess["role"] = role.value


@pytest.fixture
def admin_client(client):
    sign_in(client, role=Role.ADMIN)
    return client


@pytest.fixture
def supervisor_client(client):
    sign_in(client, role=Role.SUPERVISOR, user_id=2, name="Sam Supervisor")
    return client


@pytest.fixture
def guard_client(client):
    sign_in(client, role=Role.GUARD, user_id=3, name="Gita Guard")
    return client
