"""
timeclock_services._report_types -- Output DTOs for paystubs, timesheets
and the dashboard.

Responsibility:
    Frozen dataclasses for the presentation-ready results the reporting
    services produce.  Every hour and money figure in them is already
    rounded half-up to two decimals; ``to_dict()`` turns them into
    JSON-safe primitives (Decimals become strings, dates ISO strings).

Architecture position:
    Services -- these types live in timeclock_services/ because the
    services that produce them live here.  They depend only on the
    standard library.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID


def _iso(value: date | datetime | None) -> str:
    return value.isoformat() if value is not None else ""


@dataclass(frozen=True)
class PaystubWorker:
    id: UUID
    name: str
    code: str
    pay_rate: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "code": self.code,
            "pay_rate": str(self.pay_rate),
        }


@dataclass(frozen=True)
class PaystubPeriod:
    start: date
    end: date
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {"start": _iso(self.start), "end": _iso(self.end), "label": self.label}


@dataclass(frozen=True)
class PaystubPair:
    """One worked interval; ``clock_out`` is None for a missing punch."""
    clock_in: datetime
    clock_out: datetime | None
    hours: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "clock_in": _iso(self.clock_in),
            "clock_out": _iso(self.clock_out),
            "hours": str(self.hours),
        }


@dataclass(frozen=True)
class PaystubDay:
    work_date: date
    day_of_week: str
    pairs: tuple[PaystubPair, ...] = ()
    day_total: Decimal = Decimal("0.00")
    has_issue: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": _iso(self.work_date),
            "day_of_week": self.day_of_week,
            "pairs": [p.to_dict() for p in self.pairs],
            "day_total": str(self.day_total),
            "has_issue": self.has_issue,
        }


@dataclass(frozen=True)
class PaystubPayout:
    paid_on: date
    kind: str
    description: str
    amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": _iso(self.paid_on),
            "kind": self.kind,
            "description": self.description,
            "amount": str(self.amount),
        }


@dataclass(frozen=True)
class PaystubSummary:
    total_hours: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    regular_pay: Decimal
    overtime_pay: Decimal
    gross_pay: Decimal
    total_payouts: Decimal
    net_pay: Decimal
    pay_rate: Decimal
    overtime_rate: Decimal
    overtime_multiplier: Decimal
    total_paid: Decimal
    balance_due: Decimal
    prior_balance: Decimal

    @property
    def total_due(self) -> Decimal:
        """This week's balance plus what is still owed from earlier weeks."""
        return self.balance_due + self.prior_balance

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_hours": str(self.total_hours),
            "regular_hours": str(self.regular_hours),
            "overtime_hours": str(self.overtime_hours),
            "regular_pay": str(self.regular_pay),
            "overtime_pay": str(self.overtime_pay),
            "gross_pay": str(self.gross_pay),
            "total_payouts": str(self.total_payouts),
            "net_pay": str(self.net_pay),
            "pay_rate": str(self.pay_rate),
            "overtime_rate": str(self.overtime_rate),
            "overtime_multiplier": str(self.overtime_multiplier),
            "total_paid": str(self.total_paid),
            "balance_due": str(self.balance_due),
            "prior_balance": str(self.prior_balance),
            "total_due": str(self.total_due),
        }


@dataclass(frozen=True)
class Paystub:
    """One worker's paystub for one week."""
    worker: PaystubWorker
    period: PaystubPeriod
    daily_breakdown: tuple[PaystubDay, ...]
    payouts: tuple[PaystubPayout, ...]
    summary: PaystubSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "worker": self.worker.to_dict(),
            "period": self.period.to_dict(),
            "daily_breakdown": [d.to_dict() for d in self.daily_breakdown],
            "payouts": [p.to_dict() for p in self.payouts],
            "summary": self.summary.to_dict(),
        }


@dataclass(frozen=True)
class TimesheetRow:
    """One worker's line on the weekly timesheet."""
    worker_id: UUID
    worker_name: str
    days: tuple[PaystubDay, ...]
    total_hours: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal

    @property
    def issue_count(self) -> int:
        return sum(1 for d in self.days if d.has_issue)


@dataclass(frozen=True)
class Timesheet:
    period: PaystubPeriod
    rows: tuple[TimesheetRow, ...] = ()


@dataclass(frozen=True)
class WorkerHours:
    name: str
    regular: Decimal
    overtime: Decimal


@dataclass(frozen=True)
class DashboardStats:
    """Headline figures for a date range."""
    start: date
    end: date
    total_hours: Decimal
    total_cost: Decimal
    active_workers: int
    overtime_hours: Decimal
    missing_punches: int
    total_payouts: Decimal
    worker_hours: tuple[WorkerHours, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": _iso(self.start),
            "end": _iso(self.end),
            "total_hours": str(self.total_hours),
            "total_cost": str(self.total_cost),
            "active_workers": self.active_workers,
            "overtime_hours": str(self.overtime_hours),
            "missing_punches": self.missing_punches,
            "total_payouts": str(self.total_payouts),
            "worker_hours": [
                {"name": w.name, "regular": str(w.regular), "overtime": str(w.overtime)}
                for w in self.worker_hours
            ],
        }
