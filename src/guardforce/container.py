from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .attendance.monthly import GuardMonthlySummaryService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.overview import AttendanceOverviewService
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .company.mysql_company_repository import MySQLCompanySettingsRepository
from .company.repository import CompanySettingsRepository
from .company.service import CompanySettingsService
from .core.constants import DEFAULT_GST_RATE, DEFAULT_PERSONAL_GST_RATE
from .database.connection import DBConfig, DatabaseConnection
from .guards.mysql_guard_repository import MySQLGuardRepository
from .guards.repository import GuardRepository
from .guards.service import GuardService
from .invoices.json_invoice_repository import JsonInvoiceRepository
from .invoices.mysql_invoice_repository import MySQLInvoiceRepository
from .invoices.repository import InvoiceRepository
from .invoices.service import InvoiceService
from .invoices.tax import TaxPolicyFactory
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftAllocationService, TemporarySlotService
from .sites.mysql_site_repository import MySQLSiteRepository
from .sites.repository import SiteRepository
from .sites.service import SiteService
from .staffing_requests.mysql_staffing_request_repository import MySQLStaffingRequestRepository
from .staffing_requests.repository import StaffingRequestRepository
from .staffing_requests.service import StaffingRequestService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .utility_charges.mysql_utility_charge_repository import MySQLUtilityChargeRepository
from .utility_charges.repository import UtilityChargeRepository
from .utility_charges.service import UtilityChargeService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    sites_repo: SiteRepository
    guards_repo: GuardRepository
    shifts_repo: ShiftRepository
    attendance_repo: AttendanceRepository
    invoices_repo: InvoiceRepository
    staffing_requests_repo: StaffingRequestRepository
    users_repo: UserRepository
    company_repo: CompanySettingsRepository
    utility_charges_repo: UtilityChargeRepository
    payments_repo: PaymentRepository

    site_service: SiteService
    guard_service: GuardService
    shift_allocation_service: ShiftAllocationService
    temporary_slot_service: TemporarySlotService
    attendance_service: AttendanceService
    attendance_overview_service: AttendanceOverviewService
    guard_monthly_summary_service: GuardMonthlySummaryService
    invoice_service: InvoiceService
    staffing_request_service: StaffingRequestService
    auth_service: AuthService
    user_service: UserService
    company_service: CompanySettingsService
    utility_charge_service: UtilityChargeService
    payment_service: PaymentService


def assemble_container(
    *,
    sites_repo: SiteRepository,
    guards_repo: GuardRepository,
    shifts_repo: ShiftRepository,
    attendance_repo: AttendanceRepository,
    invoices_repo: InvoiceRepository,
    staffing_requests_repo: StaffingRequestRepository,
    users_repo: UserRepository,
    company_repo: CompanySettingsRepository,
    utility_charges_repo: UtilityChargeRepository,
    payments_repo: PaymentRepository,
    conn: Optional[DatabaseConnection] = None,
    gst_rate: float = DEFAULT_GST_RATE,
    personal_gst_rate: float = DEFAULT_PERSONAL_GST_RATE,
) -> Container:
    """Wire services on top of the given repositories."""
    company_service = CompanySettingsService(company_repo)

    return Container(
        conn=conn,
        sites_repo=sites_repo,
        guards_repo=guards_repo,
        shifts_repo=shifts_repo,
        attendance_repo=attendance_repo,
        invoices_repo=invoices_repo,
        staffing_requests_repo=staffing_requests_repo,
        users_repo=users_repo,
        company_repo=company_repo,
        utility_charges_repo=utility_charges_repo,
        payments_repo=payments_repo,
        site_service=SiteService(sites_repo),
        guard_service=GuardService(guards_repo),
        shift_allocation_service=ShiftAllocationService(shifts_repo, attendance_repo, sites_repo),
        temporary_slot_service=TemporarySlotService(shifts_repo, sites_repo),
        attendance_service=AttendanceService(attendance_repo, guards_repo, sites_repo),
        attendance_overview_service=AttendanceOverviewService(sites_repo, shifts_repo, attendance_repo),
        guard_monthly_summary_service=GuardMonthlySummaryService(attendance_repo, guards_repo),
        invoice_service=InvoiceService(
            invoices_repo,
            sites_repo,
            company_service,
            tax_factory=TaxPolicyFactory(gst_rate=gst_rate, personal_rate=personal_gst_rate),
        ),
        staffing_request_service=StaffingRequestService(staffing_requests_repo, sites_repo),
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        company_service=company_service,
        utility_charge_service=UtilityChargeService(utility_charges_repo, sites_repo),
        payment_service=PaymentService(payments_repo, guards_repo),
    )


def build_container(
    *,
    db_config: dict,
    gst_rate: float = DEFAULT_GST_RATE,
    invoice_fallback_path: Optional[str] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    if invoice_fallback_path:
        logger.info("Invoices are stored in %s", invoice_fallback_path)
        invoices_repo: InvoiceRepository = JsonInvoiceRepository(invoice_fallback_path)
    else:
        invoices_repo = MySQLInvoiceRepository(conn)

    return assemble_container(
        conn=conn,
        sites_repo=MySQLSiteRepository(conn),
        guards_repo=MySQLGuardRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        invoices_repo=invoices_repo,
        staffing_requests_repo=MySQLStaffingRequestRepository(conn),
        users_repo=MySQLUserRepository(conn),
        company_repo=MySQLCompanySettingsRepository(conn),
        utility_charges_repo=MySQLUtilityChargeRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        gst_rate=gst_rate,
    )
