from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Application roles used for role-gated operations."""

    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    GUARD = "guard"


class ShiftType(str, Enum):
    DAY = "day"
    NIGHT = "night"


class GuardStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class GuardType(str, Enum):
    PERMANENT = "permanent"
    TEMPORARY = "temporary"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in attendance_records.status."""

    PRESENT = "present"
    ABSENT = "absent"
    REPLACED = "replaced"
    REASSIGNED = "reassigned"


class OverviewStatus(str, Enum):
    """Derived per-site marking status; never stored."""

    NO_SHIFTS = "no-shifts"
    FULLY_MARKED = "fully-marked"
    NOT_MARKED = "not-marked"
    PARTIALLY_MARKED = "partially-marked"


class GstType(str, Enum):
    """Tax-treatment regime of an invoice."""

    GST = "GST"
    IGST = "IGST"
    NGST = "NGST"
    RCM = "RCM"
    PERSONAL = "PERSONAL"


# Regimes a site can be classified under (IGST only appears on custom invoices).
SITE_GST_TYPES = frozenset({GstType.GST, GstType.NGST, GstType.RCM, GstType.PERSONAL})


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


class StaffingRequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    FULFILLED = "fulfilled"


class PaymentType(str, Enum):
    """Adjustment on top of a guard's base pay."""

    BONUS = "bonus"
    DEDUCTION = "deduction"
