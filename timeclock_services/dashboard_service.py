"""
timeclock_services.dashboard_service -- Headline payroll figures for a range.

Responsibility:
    Aggregates hours, labour cost, overtime and missing punches over
    ``[start, end]`` for all active workers, and balance-increasing payouts
    for every worker, active or not.

Invariants enforced:
    - The whole range is split into regular/overtime as one block, so a
      range longer than a week applies the weekly threshold once.
    - Rates are resolved at ``start`` and fall back to the current rate.
    - Outputs are rounded half-up to two decimals.
    - ``total_payouts`` counts every payout in the snapshot, so
      ``load_dashboard_snapshot`` reads inactive workers too.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Session

from timeclock_config import PayrollSettings
from timeclock_engines import (
    compute_pay,
    effective_rates,
    pair_events,
    rate_or_current,
    to_local_date,
    total_deductions,
)
from timeclock_kernel.domain import ZERO, PayrollSnapshot, round_money
from timeclock_kernel.exceptions import InvalidPayPeriodError
from timeclock_kernel.logging_config import get_logger
from timeclock_kernel.selectors import PayrollSelector
from timeclock_services._report_types import DashboardStats, WorkerHours

logger = get_logger("services.dashboard")


def load_dashboard_snapshot(session: Session, start: date, end: date) -> PayrollSnapshot:
    """Snapshot for ``build_dashboard``; inactive workers included for their payouts."""
    return PayrollSelector(session).load_snapshot(start, end, include_inactive=True)


def build_dashboard(
    snapshot: PayrollSnapshot,
    start: date,
    end: date,
    settings: PayrollSettings | None = None,
) -> DashboardStats:
    """
    Dashboard figures for the inclusive range ``[start, end]``.

    Raises:
        InvalidPayPeriodError: if ``end`` precedes ``start``.
    """
    if end < start:
        raise InvalidPayPeriodError(start.isoformat(), end.isoformat(), "end precedes start")
    tz = settings.tzinfo if settings is not None else None

    active = [w for w in snapshot.workers if w.active]
    rates = effective_rates(snapshot.rate_history, [w.id for w in active], start)

    total_hours = ZERO
    total_cost = ZERO
    overtime_hours = ZERO
    missing_punches = 0
    worker_hours: list[WorkerHours] = []

    for worker in active:
        events = [
            e for e in snapshot.events_for(worker.id)
            if start <= to_local_date(e.timestamp, tz) <= end
        ]
        if not events:
            continue
        days = pair_events(events, tz)
        hours = sum((d.total_hours for d in days), ZERO)
        missing_punches += sum(1 for d in days if d.has_issue)

        pay = compute_pay(hours, rate_or_current(worker, rates.get(worker.id)), worker.overtime)
        total_hours += hours
        total_cost += pay.gross_pay
        overtime_hours += pay.split.overtime_hours
        worker_hours.append(
            WorkerHours(
                name=worker.display_name,
                regular=round_money(pay.split.regular_hours),
                overtime=round_money(pay.split.overtime_hours),
            )
        )

    in_range_payouts = [p for p in snapshot.payouts if start <= p.paid_on <= end]
    stats = DashboardStats(
        start=start,
        end=end,
        total_hours=round_money(total_hours),
        total_cost=round_money(total_cost),
        active_workers=len(active),
        overtime_hours=round_money(overtime_hours),
        missing_punches=missing_punches,
        total_payouts=round_money(total_deductions(in_range_payouts)),
        worker_hours=tuple(worker_hours),
    )
    logger.info(
        "dashboard_built",
        extra={
            "start": start.isoformat(),
            "end": end.isoformat(),
            "active_workers": stats.active_workers,
            "missing_punches": missing_punches,
        },
    )
    return stats
