"""
Weekly Summary Engine (``timeclock_engines.weekly_summary``).

Responsibility
--------------
Composes pairing, the overtime split and a resolved rate into one worker's
pay for one Monday-Sunday week:

1. pair all in-window punches by local day; total hours = sum of day totals
2. split regular/overtime under the worker's policy and price at ``rate``
3. deductions = in-window payouts that are not balance-reducing
4. net pay = gross pay - deductions
5. paid = in-window ``PAYMENT`` payouts
6. balance due = max(0, round2(net - paid))

Architecture position
---------------------
**Engines layer** -- pure functional core.  The rate is resolved by the
caller (``rate_history`` plus the caller's fallback).

Invariants enforced
-------------------
* A worker with no punches in the window gets no summary (``None``).
* ``balance_due`` is never negative.
* Only punches whose local date and payouts whose ``paid_on`` fall in
  ``[week_start, week_start + 6]`` are counted.

Failure modes
-------------
* ``InvalidPayPeriodError`` -- ``week_start`` is not a Monday.
* ``WorkerMismatchError`` -- a punch or payout of another worker was passed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, timedelta, tzinfo
from decimal import Decimal
from uuid import UUID

from timeclock_kernel.domain.dtos import WeeklySummary
from timeclock_kernel.domain.values import (
    ZERO,
    ClockEvent,
    Payout,
    PayoutKind,
    Worker,
    round_money,
)
from timeclock_kernel.exceptions import WorkerMismatchError
from timeclock_kernel.logging_config import get_logger
from timeclock_engines.overtime import compute_pay
from timeclock_engines.pay_periods import require_week_start
from timeclock_engines.punch_pairing import pair_events, to_local_date
from timeclock_engines.rate_history import rate_or_current
from timeclock_engines.tracer import traced_engine

logger = get_logger("engines.weekly_summary")


def _check_ownership(
    worker: Worker,
    events: Iterable[ClockEvent],
    payouts: Iterable[Payout],
) -> None:
    for event in events:
        if event.worker_id != worker.id:
            raise WorkerMismatchError(str(worker.id), "ClockEvent", str(event.worker_id))
    for payout in payouts:
        if payout.worker_id != worker.id:
            raise WorkerMismatchError(str(worker.id), "Payout", str(payout.worker_id))


def total_deductions(payouts: Iterable[Payout]) -> Decimal:
    """Sum of balance-increasing payouts (advances, loans)."""
    return sum((p.amount for p in payouts if not p.kind.is_balance_reducing), ZERO)


def total_paid(payouts: Iterable[Payout]) -> Decimal:
    """Sum of ``PAYMENT`` payouts."""
    return sum((p.amount for p in payouts if p.kind == PayoutKind.PAYMENT), ZERO)


@traced_engine("weekly_summary", "1.0", fingerprint_fields=("week_start", "rate"))
def summarize_week(
    worker: Worker,
    week_start: date,
    events: Sequence[ClockEvent],
    payouts: Sequence[Payout],
    rate: Decimal,
    tz: tzinfo | None = None,
) -> WeeklySummary | None:
    """Build one worker's WeeklySummary.

    Args:
        worker: The worker being paid (supplies the overtime policy).
        week_start: Monday of the pay week.
        events: The worker's punches; out-of-window ones are ignored.
        payouts: The worker's payouts; out-of-window ones are ignored.
        rate: Pay rate resolved for ``week_start``.
        tz: Deployment timezone for local-day grouping.

    Returns:
        WeeklySummary, or None when the worker has no punches this week.
    """
    require_week_start(week_start)
    _check_ownership(worker, events, payouts)
    week_end = week_start + timedelta(days=6)

    in_window = [
        e for e in events
        if week_start <= to_local_date(e.timestamp, tz) <= week_end
    ]
    if not in_window:
        return None

    days = tuple(pair_events(in_window, tz))
    total_hours = sum((d.total_hours for d in days), ZERO)
    pay = compute_pay(total_hours, rate, worker.overtime)

    window_payouts = [p for p in payouts if week_start <= p.paid_on <= week_end]
    deductions = total_deductions(window_payouts)
    paid = total_paid(window_payouts)
    net_pay = pay.gross_pay - deductions
    balance_due = max(ZERO, round_money(net_pay - paid))

    return WeeklySummary(
        worker_id=worker.id,
        week_start=week_start,
        week_end=week_end,
        days=days,
        total_hours=total_hours,
        regular_hours=pay.split.regular_hours,
        overtime_hours=pay.split.overtime_hours,
        rate=rate,
        regular_pay=pay.regular_pay,
        overtime_pay=pay.overtime_pay,
        gross_pay=pay.gross_pay,
        total_payouts=deductions,
        net_pay=net_pay,
        total_paid=paid,
        balance_due=balance_due,
    )


def summarize_workers(
    workers: Sequence[Worker],
    week_start: date,
    events: Sequence[ClockEvent],
    payouts: Sequence[Payout],
    rates: Mapping[UUID, Decimal],
    tz: tzinfo | None = None,
) -> list[WeeklySummary]:
    """WeeklySummary for each worker with punches this week, in ``workers`` order.

    ``rates`` is typically the result of ``effective_rates`` for
    ``week_start``; workers missing from it are paid at their current rate.
    Events and payouts of workers not in ``workers`` are ignored.
    """
    events_by_worker: dict[UUID, list[ClockEvent]] = {}
    for event in events:
        events_by_worker.setdefault(event.worker_id, []).append(event)
    payouts_by_worker: dict[UUID, list[Payout]] = {}
    for payout in payouts:
        payouts_by_worker.setdefault(payout.worker_id, []).append(payout)

    summaries: list[WeeklySummary] = []
    for worker in workers:
        summary = summarize_week(
            worker=worker,
            week_start=week_start,
            events=events_by_worker.get(worker.id, []),
            payouts=payouts_by_worker.get(worker.id, []),
            rate=rate_or_current(worker, rates.get(worker.id)),
            tz=tz,
        )
        if summary is not None:
            summaries.append(summary)

    logger.debug(
        "workers_summarized",
        extra={
            "week_start": week_start.isoformat(),
            "workers": len(workers),
            "summaries": len(summaries),
        },
    )
    return summaries
