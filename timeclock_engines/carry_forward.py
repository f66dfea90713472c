"""
Carry-Forward Engine (``timeclock_engines.carry_forward``).

Responsibility
--------------
Computes a worker's *prior balance*: what is still owed from every week
before the current pay week, back to the accounting-start floor date.

Each historical week is summarized independently with the same weekly
engine the paystub uses, at that week's own resolved rate, and contributes
``max(0, net - paid)``.

Architecture position
---------------------
**Engines layer** -- pure functional core.  Re-derives the whole history
on every call; there is nothing to invalidate when a backdated punch,
payout or rate correction arrives.

Invariants enforced
-------------------
* Weeks are keyed by the Monday of the punches' local dates.  Weeks with
  payouts but no punches contribute nothing.
* Each week's contribution is floored at zero, so the total is never
  negative and one week's overpayment never offsets another week.
* Rounding follows ``CarryForwardRounding``; ``PER_WEEK`` rounds net and
  paid per week and then the sum, ``FINAL_ONLY`` rounds the sum only.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, tzinfo

from timeclock_kernel.domain.dtos import PriorBalance, WeekContribution
from timeclock_kernel.domain.values import (
    ZERO,
    CarryForwardRounding,
    ClockEvent,
    Payout,
    Worker,
    round_money,
)
from timeclock_kernel.logging_config import get_logger
from timeclock_engines.pay_periods import require_week_start, week_start
from timeclock_engines.punch_pairing import to_local_date
from timeclock_engines.rate_history import RateSchedule, rate_or_current
from timeclock_engines.tracer import traced_engine
from timeclock_engines.weekly_summary import summarize_week

logger = get_logger("engines.carry_forward")


@traced_engine(
    "carry_forward", "1.0",
    fingerprint_fields=("current_week_start", "floor_date", "rounding"),
)
def compute_prior_balance(
    worker: Worker,
    current_week_start: date,
    events: Sequence[ClockEvent],
    payouts: Sequence[Payout],
    schedule: RateSchedule,
    floor_date: date,
    rounding: CarryForwardRounding = CarryForwardRounding.PER_WEEK,
    tz: tzinfo | None = None,
) -> PriorBalance:
    """Sum the unpaid remainder of every week in ``[floor_date, current_week_start)``.

    Args:
        worker: The worker (overtime policy, fallback rate).
        current_week_start: Monday of the pay week being issued.
        events: The worker's punches; anything outside the history window
            is ignored.
        payouts: The worker's payouts; same window.
        schedule: Rate history index for this request.
        floor_date: Accounting-start date; nothing before it is owed.
        rounding: Per-week or final-only rounding.
        tz: Deployment timezone for local-day grouping.

    Returns:
        PriorBalance with the rounded amount and each week's contribution.
    """
    require_week_start(current_week_start)

    def in_history(day: date) -> bool:
        return floor_date <= day < current_week_start

    history_payouts = [p for p in payouts if in_history(p.paid_on)]
    buckets: dict[date, list[ClockEvent]] = {}
    for event in events:
        local_day = to_local_date(event.timestamp, tz)
        if in_history(local_day):
            buckets.setdefault(week_start(local_day), []).append(event)

    contributions: list[WeekContribution] = []
    total = ZERO
    for monday in sorted(buckets):
        rate = rate_or_current(worker, schedule.rate_on(worker.id, monday))
        summary = summarize_week(
            worker=worker,
            week_start=monday,
            events=buckets[monday],
            payouts=history_payouts,
            rate=rate,
            tz=tz,
        )
        if summary is None:
            continue

        net, paid = summary.net_pay, summary.total_paid
        if rounding == CarryForwardRounding.PER_WEEK:
            net, paid = round_money(net), round_money(paid)
        owed = max(ZERO, net - paid)
        total += owed
        contributions.append(
            WeekContribution(
                week_start=monday,
                rate=rate,
                net_pay=net,
                total_paid=paid,
                owed=owed,
            )
        )

    amount = round_money(total)
    logger.info(
        "prior_balance_computed",
        extra={
            "worker_id": str(worker.id),
            "current_week_start": current_week_start.isoformat(),
            "floor_date": floor_date.isoformat(),
            "weeks": len(contributions),
            "prior_balance": str(amount),
            "rounding": rounding.value,
        },
    )
    return PriorBalance(
        worker_id=worker.id,
        as_of_week=current_week_start,
        amount=amount,
        weeks=tuple(contributions),
    )
