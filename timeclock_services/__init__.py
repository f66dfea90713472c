"""
timeclock_services -- Package init and public API.

Responsibility:
    Orchestration that composes the pure engines (timeclock_engines/) with
    settings, database sessions and the system clock: paystubs, timesheets,
    the dashboard, rate edits and punch imports.

Architecture position:
    Services -- the top layer.

    Dependency direction (enforced by tests/architecture/test_import_boundaries.py):
        timeclock_services/ -> timeclock_engines/  (allowed)
        timeclock_services/ -> timeclock_kernel/   (allowed)
        timeclock_services/ -> timeclock_config/   (allowed)
        timeclock_engines/  -> timeclock_services/ (FORBIDDEN)
        timeclock_kernel/   -> timeclock_services/ (FORBIDDEN)
"""

from timeclock_services._report_types import (
    DashboardStats,
    Paystub,
    PaystubDay,
    PaystubPair,
    PaystubPayout,
    PaystubPeriod,
    PaystubSummary,
    PaystubWorker,
    Timesheet,
    TimesheetRow,
    WorkerHours,
)
from timeclock_services.dashboard_service import build_dashboard, load_dashboard_snapshot
from timeclock_services.pay_rate_service import PayRateService
from timeclock_services.paystub_service import PaystubService
from timeclock_services.punch_import_service import ImportResult, PunchImportService
from timeclock_services.timesheet_service import build_timesheet

__all__ = [
    "DashboardStats",
    "Paystub",
    "PaystubDay",
    "PaystubPair",
    "PaystubPayout",
    "PaystubPeriod",
    "PaystubSummary",
    "PaystubWorker",
    "Timesheet",
    "TimesheetRow",
    "WorkerHours",
    "build_dashboard",
    "load_dashboard_snapshot",
    "PayRateService",
    "PaystubService",
    "ImportResult",
    "PunchImportService",
    "build_timesheet",
]
