from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from guardforce.attendance.model import AttendanceRecord
from guardforce.core.enums import AttendanceStatus, Role, ShiftType
from guardforce.shifts.model import Shift
from guardforce.sites.service import parse_site_payload
from guardforce.users.model import User

SITE_PAYLOAD = {
    "site_name": "Corporate Office Complex",
    "organization_name": "TechCorp Industries",
    "gst_type": "GST",
    "address_line1": "123 Business District",
    "staffing_requirements": [
        {"role_type": "Security Guard", "budget_per_slot": 1500, "day_slots": 10, "night_slots": 0},
        {"role_type": "Night Guard", "budget_per_slot": 1800, "day_slots": 0, "night_slots": 8},
        {"role_type": "Supervisor", "budget_per_slot": 2500, "day_slots": 2, "night_slots": 0},
    ],
}


def _site_draft():
    return parse_site_payload(SITE_PAYLOAD)


def test_requires_sign_in(client):
    resp = client.get("/api/sites")

    assert resp.status_code == 401
    assert "error" in resp.get_json()


def test_non_admin_cannot_create_site(guard_client):
    assert guard_client.post("/api/sites", json=SITE_PAYLOAD).status_code == 403


def test_site_crud_and_summary(admin_client):
    created = admin_client.post("/api/sites", json=SITE_PAYLOAD)
    assert created.status_code == 201
    site = created.get_json()
    assert site["day_slots"] == 12 and site["night_slots"] == 8

    summary = admin_client.get(f"/api/sites/{site['site_id']}/summary").get_json()
    assert summary["day_fill_percent"] == 0.0

    assert admin_client.get("/api/sites/999").status_code == 404
    assert admin_client.post("/api/sites", json={**SITE_PAYLOAD, "site_name": ""}).status_code == 400
    assert admin_client.delete(f"/api/sites/{site['site_id']}").status_code == 204


def test_login_me_logout(client, repos):
    repos["users_repo"].rows[7] = User(7, "Sam", "sam@example.com", generate_password_hash("hunter22"), Role.SUPERVISOR)

    assert client.post("/api/login", json={"email": "sam@example.com", "password": "nope"}).status_code == 401

    resp = client.post("/api/login", json={"email": "sam@example.com", "password": "hunter22"})
    assert resp.status_code == 200
    assert client.get("/api/me").get_json() == {
        "user_id": 7,
        "name": "Sam",
        "email": "sam@example.com",
        "role": "supervisor",
    }

    client.post("/api/logout")
    assert client.get("/api/me").status_code == 401


def test_admin_create_user_contract(admin_client, repos, monkeypatch):
    payload = {"name": "Gita", "email": "gita@example.com", "password": "hunter22", "role": "guard"}

    ok = admin_client.post("/api/admin/users", json=payload)
    assert ok.status_code == 200
    body = ok.get_json()
    assert body["success"] is True
    assert body["user"]["email"] == "gita@example.com"
    assert "password_hash" not in body["user"]

    bad = admin_client.post("/api/admin/users", json={**payload, "email": "other@example.com", "password": "1"})
    assert bad.status_code == 400
    assert "error" in bad.get_json()

    def boom(**kwargs):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(repos["users_repo"], "create_user", boom)
    failed = admin_client.post("/api/admin/users", json={**payload, "email": "third@example.com"})
    assert failed.status_code == 500
    assert failed.get_json() == {"error": "database unavailable"}


def test_allocation_conflict_then_confirm(supervisor_client, repos, fixed_today):
    site_id = repos["sites_repo"].create(_site_draft())
    repos["shifts_repo"].rows[1] = Shift(1, site_id, ShiftType.DAY, guard_id=10)
    repos["attendance_repo"].rows[50] = AttendanceRecord(
        attendance_id=50,
        attendance_date=fixed_today,
        site_id=site_id,
        shift_type=ShiftType.DAY,
        guard_id=10,
        status=AttendanceStatus.PRESENT,
    )
    url = f"/api/sites/{site_id}/allocation"

    blocked = supervisor_client.post(url, json={"shift_type": "day", "guard_ids": [11]})
    assert blocked.status_code == 409
    assert blocked.get_json()["conflicts"] == [{"attendance_id": 50, "guard_id": 10, "status": "present"}]
    assert repos["shifts_repo"].deleted == []

    done = supervisor_client.post(url, json={"shift_type": "day", "guard_ids": [11], "confirm": True})
    assert done.status_code == 200
    assert done.get_json()["deleted_attendance_ids"] == [50]
    assert repos["shifts_repo"].assigned_guards(site_id, ShiftType.DAY) == {11}


def test_allocation_rejects_bad_payload(admin_client, repos):
    site_id = repos["sites_repo"].create(_site_draft())

    resp = admin_client.post(f"/api/sites/{site_id}/allocation", json={"shift_type": "evening", "guard_ids": []})
    assert resp.status_code == 400
    resp = admin_client.post(f"/api/sites/{site_id}/allocation", json={"shift_type": "day", "guard_ids": "1,2"})
    assert resp.status_code == 400


def test_temporary_slots_add_and_copy(admin_client, repos):
    site_id = repos["sites_repo"].create(_site_draft())
    slots = [{"role_type": "Guard", "day_slots": 1, "night_slots": 1, "pay_rate": 900}]

    added = admin_client.post(f"/api/sites/{site_id}/temporary-slots", json={"date": "2025-01-15", "slots": slots})
    assert added.get_json() == {"created": 2}

    copy_url = f"/api/sites/{site_id}/temporary-slots/copy"
    assert admin_client.post(copy_url, json={"from_date": "2025-01-15", "to_date": "2025-01-16"}).get_json() == {"copied": 2}
    assert admin_client.post(copy_url, json={"from_date": "2025-01-10", "to_date": "2025-01-16"}).get_json() == {"copied": 0}

    shifts = admin_client.get(f"/api/sites/{site_id}/shifts?date=2025-01-16").get_json()
    assert len(shifts) == 2


def test_mark_attendance_and_today_view(supervisor_client, repos):
    site_id = repos["sites_repo"].create(_site_draft())
    guard_id = repos["guards_repo"].create(name="Ravi", badge_number="SG-1")

    marked = supervisor_client.post(
        "/api/attendance",
        json={"guard_id": guard_id, "site_id": site_id, "shift_type": "day", "status": "present"},
    )
    assert marked.status_code == 201

    today = supervisor_client.get("/api/attendance/today").get_json()
    assert today["date"] == "2025-01-15"
    assert today["poll_seconds"] == 30
    assert [r["guard_id"] for r in today["records"]] == [guard_id]

    overview = supervisor_client.get("/api/attendance/overview?date=2025-01-15").get_json()
    assert overview["sites"][0]["status"] == "no-shifts"

    assert supervisor_client.get("/api/attendance?date=15-01-2025").status_code == 400


def test_invoice_endpoints(admin_client, repos):
    site_id = repos["sites_repo"].create(_site_draft())

    created = admin_client.post(
        "/api/invoices",
        json={"site_id": site_id, "period_from": "2024-08-01", "period_to": "2024-08-31", "invoice_date": "2024-08-23"},
    )
    assert created.status_code == 201
    inv = created.get_json()
    assert inv["invoice_number"] == "INV-20240823-001"
    assert inv["cgst_amount"] == pytest.approx(3096)
    assert inv["total_amount"] == pytest.approx(40592)

    patched = admin_client.patch(f"/api/invoices/{inv['invoice_id']}", json={"status": "sent", "notes": "emailed"})
    assert patched.get_json()["status"] == "sent"
    assert patched.get_json()["notes"] == "emailed"

    auto = admin_client.post("/api/invoices/auto-generate", json={"year": 2024, "month": 8})
    assert auto.get_json()["created"] == []
    assert auto.get_json()["skipped_site_ids"] == [site_id]

    assert admin_client.delete(f"/api/invoices/{inv['invoice_id']}").status_code == 204
    assert admin_client.get(f"/api/invoices/{inv['invoice_id']}").status_code == 404


def test_invoices_are_admin_only(supervisor_client):
    assert supervisor_client.get("/api/invoices").status_code == 403


def test_staffing_requests_and_company(admin_client, repos):
    site_id = repos["sites_repo"].create(_site_draft())

    created = admin_client.post(
        "/api/staffing-requests",
        json={"site_id": site_id, "request_date": "2025-01-20", "night_temp_slots": 3},
    )
    assert created.status_code == 201
    request_id = created.get_json()["request_id"]
    assert created.get_json()["requested_by"] == "Asha Admin"

    approved = admin_client.post(f"/api/staffing-requests/{request_id}/status", json={"status": "approved"})
    assert approved.get_json()["status"] == "approved"

    assert admin_client.get("/api/company").get_json()["company_name"] == "Security Management System"
    saved = admin_client.put("/api/company", json={"company_name": "SecureGuard", "personal_billing_names": ["Mr. Rao"]})
    assert saved.get_json()["personal_billing_names"] == ["Mr. Rao"]
    assert admin_client.get("/api/company").get_json()["company_name"] == "SecureGuard"


def test_unknown_route_keeps_http_status(admin_client):
    assert admin_client.get("/api/nowhere").status_code == 404


def test_non_finite_numbers_are_rejected_with_400(admin_client, repos):
    site_id = repos["sites_repo"].create(_site_draft())

    invoice = admin_client.post(
        "/api/invoices/custom",
        json={
            "site_name": "Expo",
            "client_name": "Expo Ltd",
            "period_from": "2024-09-01",
            "period_to": "2024-09-30",
            "line_items": [{"description": "Guard", "quantity": "nan", "rate_per_slot": 100}],
        },
    )
    assert invoice.status_code == 400
    assert repos["invoices_repo"].rows == {}

    slot = {"role_type": "Guard", "day_slots": 1, "night_slots": 0, "pay_rate": "nan"}
    slots = admin_client.post(f"/api/sites/{site_id}/temporary-slots", json={"date": "2025-01-15", "slots": [slot]})
    assert slots.status_code == 400
    assert repos["shifts_repo"].create_many_calls == 0

    bad_budget = [{"role_type": "Guard", "budget_per_slot": "inf", "day_slots": 1}]
    site = admin_client.post("/api/sites", json={**SITE_PAYLOAD, "staffing_requirements": bad_budget})
    assert site.status_code == 400


def test_wrongly_typed_payload_fields_are_rejected_with_400(admin_client, repos):
    site_id = repos["sites_repo"].create(_site_draft())
    url = f"/api/sites/{site_id}/temporary-slots"

    numeric_role = [{"role_type": 5, "day_slots": 1, "night_slots": 0, "pay_rate": 100}]
    assert admin_client.post(url, json={"date": "2025-01-15", "slots": numeric_role}).status_code == 400
    assert admin_client.post(url, json={"date": "2025-01-15", "slots": ["Guard"]}).status_code == 400
    assert admin_client.post("/api/sites", json={**SITE_PAYLOAD, "site_name": 12}).status_code == 400
    assert admin_client.post("/api/login", json={"email": 5, "password": ["x"]}).status_code == 401


def test_allocation_confirm_must_be_a_boolean(supervisor_client, repos, fixed_today):
    site_id = repos["sites_repo"].create(_site_draft())
    repos["shifts_repo"].rows[1] = Shift(1, site_id, ShiftType.DAY, guard_id=10)
    repos["attendance_repo"].rows[50] = AttendanceRecord(
        attendance_id=50,
        attendance_date=fixed_today,
        site_id=site_id,
        shift_type=ShiftType.DAY,
        guard_id=10,
        status=AttendanceStatus.PRESENT,
    )

    resp = supervisor_client.post(
        f"/api/sites/{site_id}/allocation",
        json={"shift_type": "day", "guard_ids": [11], "confirm": "false"},
    )

    assert resp.status_code == 400
    assert repos["attendance_repo"].deleted == []
    assert repos["shifts_repo"].assigned_guards(site_id, ShiftType.DAY) == {10}


def test_overview_rows_carry_site_address(supervisor_client, repos):
    repos["sites_repo"].create(_site_draft())

    rows = supervisor_client.get("/api/attendance/overview?date=2025-01-15").get_json()["sites"]

    assert rows[0]["address"] == "123 Business District"


def test_attendance_rejects_guard_present_at_another_site(supervisor_client, repos):
    first = repos["sites_repo"].create(_site_draft())
    second = repos["sites_repo"].create(_site_draft())
    guard_id = repos["guards_repo"].create(name="Ravi", badge_number="SG-1")
    payload = {"guard_id": guard_id, "shift_type": "night", "status": "present"}

    assert supervisor_client.post("/api/attendance", json={**payload, "site_id": first}).status_code == 201
    resp = supervisor_client.post("/api/attendance", json={**payload, "site_id": second})

    assert resp.status_code == 400
    assert "already marked present" in resp.get_json()["error"]


def test_monthly_guard_summaries(supervisor_client, repos):
    site_id = repos["sites_repo"].create(_site_draft())
    guard_id = repos["guards_repo"].create(name="Ravi", badge_number="SG-1")
    for day, status in (("2025-01-02", "present"), ("2025-01-03", "absent")):
        supervisor_client.post(
            "/api/attendance",
            json={"guard_id": guard_id, "site_id": site_id, "shift_type": "day", "status": status, "attendance_date": day},
        )

    one = supervisor_client.get(f"/api/guards/{guard_id}/monthly?month=2025-01").get_json()
    assert one["month"] == "2025-01"
    assert (one["day_shifts"], one["absent_days"], one["attendance_rate"]) == (1, 1, 50.0)

    everyone = supervisor_client.get("/api/attendance/monthly").get_json()
    assert [r["guard_name"] for r in everyone] == ["Ravi"]

    assert supervisor_client.get("/api/attendance/monthly?month=2025-13").status_code == 400
    assert supervisor_client.get("/api/guards/999/monthly?month=2025-01").status_code == 404


def test_utility_charges_endpoints(admin_client, repos):
    site_id = repos["sites_repo"].create(_site_draft())
    url = f"/api/sites/{site_id}/utility-charges"

    created = admin_client.post(url, json={"description": "Water", "amount": 350})
    assert created.status_code == 201
    charge_id = created.get_json()["charge_id"]

    assert admin_client.post(url, json={"description": "Power", "amount": "nan"}).status_code == 400
    updated = admin_client.put(f"/api/utility-charges/{charge_id}", json={"amount": 400})
    assert updated.get_json()["amount"] == 400.0

    assert admin_client.delete(f"/api/utility-charges/{charge_id}").status_code == 204
    assert admin_client.get(url).get_json() == []
    assert repos["utility_charges_repo"].get_by_id(charge_id).is_active is False


def test_utility_charges_are_admin_managed(supervisor_client, repos):
    site_id = repos["sites_repo"].create(_site_draft())

    resp = supervisor_client.post(f"/api/sites/{site_id}/utility-charges", json={"description": "Water", "amount": 1})

    assert resp.status_code == 403
    assert supervisor_client.get(f"/api/sites/{site_id}/utility-charges").status_code == 200


def test_payment_endpoints(admin_client, repos):
    guard_id = repos["guards_repo"].create(name="Ravi", badge_number="SG-1")

    created = admin_client.post(
        "/api/payments",
        json={"guard_id": guard_id, "payment_date": "2025-01-10", "amount": 500, "payment_type": "bonus"},
    )
    assert created.status_code == 201
    payment = created.get_json()
    assert payment["month"] == "2025-01"

    assert len(admin_client.get(f"/api/guards/{guard_id}/payments").get_json()) == 1
    assert admin_client.get("/api/payments?month=2025-02").get_json() == []

    updated = admin_client.put(f"/api/payments/{payment['payment_id']}", json={"payment_type": "deduction"})
    assert updated.get_json()["payment_type"] == "deduction"

    assert admin_client.delete(f"/api/payments/{payment['payment_id']}").status_code == 204
    assert admin_client.get("/api/payments").get_json() == []


def test_payments_are_admin_only(supervisor_client):
    assert supervisor_client.get("/api/payments").status_code == 403
