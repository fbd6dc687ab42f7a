"""In-memory repositories shared by the service and HTTP tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import date

from guardforce.attendance.model import AttendanceRecord
from guardforce.core.enums import AttendanceStatus, StaffingRequestStatus
from guardforce.guards.model import Guard
from guardforce.invoices.model import Invoice
from guardforce.payments.model import PaymentRecord
from guardforce.shifts.model import Shift
from guardforce.sites.model import Site, StaffingRequirement
from guardforce.staffing_requests.model import TemporaryStaffingRequest
from guardforce.users.model import User
from guardforce.utility_charges.model import UtilityCharge


class _Ids:
    def __init__(self, start: int = 1):
        self._next = start

    def __call__(self) -> int:
        value = self._next
        self._next += 1
        return value


class FakeSiteRepo:
    def __init__(self, sites=()):
        self._sites: dict[int, Site] = {s.site_id: s for s in sites}
        self._ids = _Ids(max(self._sites, default=0) + 1)
        self._req_ids = _Ids(1)

    def _with_ids(self, site_id, reqs):
        return tuple(replace(r, requirement_id=self._req_ids(), site_id=site_id) for r in reqs)

    def list_all(self):
        return list(self._sites.values())

    def get_by_id(self, site_id):
        return self._sites.get(int(site_id))

    def create(self, draft):
        site_id = self._ids()
        self._sites[site_id] = Site(
            site_id=site_id,
            site_name=draft.site_name,
            organization_name=draft.organization_name,
            gst_number=draft.gst_number,
            gst_type=draft.gst_type,
            address_line1=draft.address_line1,
            address_line2=draft.address_line2,
            address_line3=draft.address_line3,
            site_category=draft.site_category,
            personal_billing_name=draft.personal_billing_name,
            staffing_requirements=self._with_ids(site_id, draft.staffing_requirements),
        )
        return site_id

    def update(self, site_id, draft):
        if int(site_id) not in self._sites:
            return False
        self._sites[int(site_id)] = Site(
            site_id=int(site_id),
            site_name=draft.site_name,
            organization_name=draft.organization_name,
            gst_number=draft.gst_number,
            gst_type=draft.gst_type,
            address_line1=draft.address_line1,
            address_line2=draft.address_line2,
            address_line3=draft.address_line3,
            site_category=draft.site_category,
            personal_billing_name=draft.personal_billing_name,
            staffing_requirements=self._with_ids(int(site_id), draft.staffing_requirements),
        )
        return True

    def delete_by_id(self, site_id):
        return self._sites.pop(int(site_id), None) is not None

    def list_requirements(self, site_id):
        site = self._sites.get(int(site_id))
        return list(site.staffing_requirements) if site else []


class FakeGuardRepo:
    def __init__(self, guards=()):
        self._guards: dict[int, Guard] = {g.guard_id: g for g in guards}
        self._ids = _Ids(max(self._guards, default=0) + 1)

    def list_all(self):
        return list(self._guards.values())

    def get_by_id(self, guard_id):
        return self._guards.get(int(guard_id))

    def get_by_badge(self, badge_number):
        return next((g for g in self._guards.values() if g.badge_number == badge_number), None)

    def create(self, **fields):
        guard_id = self._ids()
        self._guards[guard_id] = Guard(guard_id=guard_id, **fields)
        return guard_id

    def update(self, *, guard_id, **fields):
        if int(guard_id) not in self._guards:
            return False
        self._guards[int(guard_id)] = Guard(guard_id=int(guard_id), **fields)
        return True

    def delete_by_id(self, guard_id):
        return self._guards.pop(int(guard_id), None) is not None


class FakeShiftRepo:
    """Records writes so tests can count deletes and inserts."""

    def __init__(self, shifts=()):
        self.rows: dict[int, Shift] = {s.shift_id: s for s in shifts}
        self._ids = _Ids(max(self.rows, default=0) + 1)
        self.deleted: list[int] = []
        self.created: list = []
        self.create_many_calls = 0
        self.fail_delete_ids: set[int] = set()
        self.fail_create_guard_ids: set[int] = set()

    def get_by_id(self, shift_id):
        return self.rows.get(int(shift_id))

    def list_by_site(self, site_id):
        return [s for s in self.rows.values() if s.site_id == int(site_id) and not s.is_temporary]

    def list_by_site_and_date(self, site_id, on_date):
        return [
            s
            for s in self.rows.values()
            if s.site_id == int(site_id) and (not s.is_temporary or s.created_for_date == on_date)
        ]

    def list_temporary(self, site_id, on_date):
        return [
            s
            for s in self.rows.values()
            if s.site_id == int(site_id) and s.is_temporary and s.created_for_date == on_date
        ]

    def list_assigned(self):
        return [s for s in self.rows.values() if s.guard_id is not None]

    def _insert(self, new):
        shift_id = self._ids()
        while shift_id in self.rows:
            shift_id = self._ids()
        self.rows[shift_id] = Shift(shift_id=shift_id, **new.__dict__)
        self.created.append(new)
        return shift_id

    def create(self, shift):
        if shift.guard_id in self.fail_create_guard_ids:
            raise RuntimeError(f"insert failed for guard {shift.guard_id}")
        return self._insert(shift)

    def create_many(self, shifts):
        self.create_many_calls += 1
        for s in shifts:
            self._insert(s)
        return len(shifts)

    def set_guard(self, shift_id, guard_id):
        shift = self.rows.get(int(shift_id))
        if not shift:
            return False
        self.rows[int(shift_id)] = replace(shift, guard_id=guard_id)
        return True

    def delete_by_id(self, shift_id):
        if int(shift_id) in self.fail_delete_ids:
            raise RuntimeError(f"delete failed for shift {shift_id}")
        self.deleted.append(int(shift_id))
        return self.rows.pop(int(shift_id), None) is not None

    def assigned_guards(self, site_id, shift_type):
        return {
            s.guard_id
            for s in self.rows.values()
            if s.site_id == site_id and s.shift_type == shift_type and s.guard_id is not None and not s.is_temporary
        }


class FakeAttendanceRepo:
    def __init__(self, records=()):
        self.rows: dict[int, AttendanceRecord] = {r.attendance_id: r for r in records}
        self._ids = _Ids(max(self.rows, default=0) + 1)
        self.deleted: list[int] = []

    def get_by_id(self, attendance_id):
        return self.rows.get(int(attendance_id))

    def list_for_date(self, on_date, *, site_id=None):
        return [
            r
            for r in self.rows.values()
            if r.attendance_date == on_date and (site_id is None or r.site_id == int(site_id))
        ]

    def list_present_for_date(self, on_date):
        return [r for r in self.rows.values() if r.attendance_date == on_date and r.status == AttendanceStatus.PRESENT]

    def find_for_guards(self, *, site_id, shift_type, on_date, guard_ids):
        wanted = set(guard_ids)
        return [
            r
            for r in self.rows.values()
            if r.site_id == site_id and r.shift_type == shift_type and r.attendance_date == on_date and r.guard_id in wanted
        ]

    def get_for_guard_shift_date(self, *, guard_id, site_id, shift_type, on_date):
        return next(
            (
                r
                for r in self.rows.values()
                if r.guard_id == guard_id
                and r.site_id == site_id
                and r.shift_type == shift_type
                and r.attendance_date == on_date
            ),
            None,
        )

    def find_present_elsewhere(self, *, guard_id, shift_type, on_date, exclude_site_id):
        return next(
            (
                r
                for r in self.rows.values()
                if r.guard_id == guard_id
                and r.shift_type == shift_type
                and r.attendance_date == on_date
                and r.status == AttendanceStatus.PRESENT
                and r.site_id != exclude_site_id
            ),
            None,
        )

    def list_between(self, start, end, *, guard_id=None):
        return [
            r
            for r in sorted(self.rows.values(), key=lambda r: (r.attendance_date, r.attendance_id))
            if start <= r.attendance_date <= end and (guard_id is None or r.guard_id == guard_id)
        ]

    def create(self, record):
        attendance_id = self._ids()
        while attendance_id in self.rows:
            attendance_id = self._ids()
        self.rows[attendance_id] = AttendanceRecord(attendance_id=attendance_id, **record.__dict__)
        return attendance_id

    def delete_by_id(self, attendance_id):
        self.deleted.append(int(attendance_id))
        return self.rows.pop(int(attendance_id), None) is not None


class FakeInvoiceRepo:
    def __init__(self):
        self.rows: dict[int, Invoice] = {}
        self._ids = _Ids(1)

    def list_all(self):
        return sorted(self.rows.values(), key=lambda i: (i.invoice_date, i.invoice_id), reverse=True)

    def get_by_id(self, invoice_id):
        return self.rows.get(int(invoice_id))

    def list_numbers_with_prefix(self, prefix):
        return [i.invoice_number for i in self.rows.values() if i.invoice_number.startswith(prefix)]

    def site_ids_with_period_starting(self, start: date, end: date):
        return {i.site_id for i in self.rows.values() if i.site_id is not None and start <= i.period_from <= end}

    def create(self, draft):
        invoice_id = self._ids()
        self.rows[invoice_id] = Invoice(invoice_id=invoice_id, **draft.__dict__)
        return invoice_id

    def update_status_notes(self, invoice_id, *, status, notes):
        inv = self.rows.get(int(invoice_id))
        if not inv:
            return False
        self.rows[int(invoice_id)] = replace(inv, status=status, notes=notes)
        return True

    def delete_by_id(self, invoice_id):
        return self.rows.pop(int(invoice_id), None) is not None


class FakeStaffingRequestRepo:
    def __init__(self):
        self.rows: dict[int, TemporaryStaffingRequest] = {}
        self._ids = _Ids(1)

    def list_all(self):
        return list(self.rows.values())

    def get_by_id(self, request_id):
        return self.rows.get(int(request_id))

    def create(self, request):
        request_id = self._ids()
        self.rows[request_id] = TemporaryStaffingRequest(
            request_id=request_id,
            status=StaffingRequestStatus.PENDING,
            **request.__dict__,
        )
        return request_id

    def set_status(self, request_id, status):
        row = self.rows.get(int(request_id))
        if not row:
            return False
        self.rows[int(request_id)] = replace(row, status=status)
        return True


class FakeUserRepo:
    def __init__(self, users=()):
        self.rows: dict[int, User] = {u.user_id: u for u in users}
        self._ids = _Ids(max(self.rows, default=0) + 1)

    def get_by_id(self, user_id):
        return self.rows.get(int(user_id))

    def get_by_email(self, email):
        return next((u for u in self.rows.values() if u.email == email), None)

    def create_user(self, *, name, email, password_hash, role):
        user_id = self._ids()
        self.rows[user_id] = User(user_id=user_id, name=name, email=email, password_hash=password_hash, role=role)
        return user_id


class FakeCompanyRepo:
    def __init__(self, settings=None):
        self.settings = settings

    def get(self):
        return self.settings

    def save(self, settings):
        self.settings = settings


class FakeUtilityChargeRepo:
    def __init__(self, charges=()):
        self.rows: dict[int, UtilityCharge] = {c.charge_id: c for c in charges}
        self._ids = _Ids(max(self.rows, default=0) + 1)

    def list_active(self, *, site_id=None):
        return [c for c in self.rows.values() if c.is_active and (site_id is None or c.site_id == int(site_id))]

    def get_by_id(self, charge_id):
        return self.rows.get(int(charge_id))

    def create(self, draft):
        charge_id = self._ids()
        self.rows[charge_id] = UtilityCharge(charge_id=charge_id, **draft.__dict__)
        return charge_id

    def update(self, charge_id, *, description, amount):
        current = self.rows.get(int(charge_id))
        if not current or not current.is_active:
            return False
        self.rows[current.charge_id] = replace(current, description=description, amount=amount)
        return True

    def deactivate(self, charge_id):
        current = self.rows.get(int(charge_id))
        if not current or not current.is_active:
            return False
        self.rows[current.charge_id] = replace(current, is_active=False)
        return True


class FakePaymentRepo:
    def __init__(self, payments=()):
        self.rows: dict[int, PaymentRecord] = {p.payment_id: p for p in payments}
        self._ids = _Ids(max(self.rows, default=0) + 1)

    def list_all(self, *, guard_id=None, month=None):
        return [
            p
            for p in self.rows.values()
            if (guard_id is None or p.guard_id == guard_id) and (month is None or p.month == month)
        ]

    def get_by_id(self, payment_id):
        return self.rows.get(int(payment_id))

    def create(self, draft):
        payment_id = self._ids()
        self.rows[payment_id] = PaymentRecord(payment_id=payment_id, **draft.__dict__)
        return payment_id

    def update(self, payment_id, draft):
        if int(payment_id) not in self.rows:
            return False
        self.rows[int(payment_id)] = PaymentRecord(payment_id=int(payment_id), **draft.__dict__)
        return True

    def delete_by_id(self, payment_id):
        return self.rows.pop(int(payment_id), None) is not None


def requirement(role="Security Guard", budget=1000.0, day=0, night=0) -> StaffingRequirement:
    return StaffingRequirement(role_type=role, budget_per_slot=budget, day_slots=day, night_slots=night)
