"""
timeclock_services.paystub_service -- Weekly paystubs with carry-forward.

Responsibility:
    Turns one ``PayrollSnapshot`` into presentation-ready paystubs for a
    Monday-Sunday week: a seven-day breakdown of paired punches, the week's
    payouts, and a rounded pay summary that includes the prior balance
    still owed from earlier weeks.

Architecture position:
    Services -- orchestration over engines + kernel.  Owns the caller-side
    decisions the engines leave open: which workers to include, the
    fallback from rate history to the worker's current rate, and rounding
    at the output boundary.

Invariants enforced:
    - Every figure in a Paystub is rounded half-up to two decimals; the
      engines underneath compute at full precision.
    - The current week's rate and every historical week's rate come from
      the same ``RateSchedule`` built for this call.
    - Workers without punches in the week get no paystub.

Failure modes:
    - WorkerNotFoundError: an explicit ``worker_id`` is not in the snapshot.
    - InvalidPayPeriodError: propagated from the engines.

Usage:
    from timeclock_kernel.db import session_scope
    from timeclock_services import PaystubService

    service = PaystubService()
    with session_scope() as session:
        snapshot = service.load_snapshot(session, week_of)
    paystubs = service.build_paystubs(snapshot, week_of)
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from timeclock_config import PayrollSettings, get_settings
from timeclock_engines import (
    PayPeriod,
    RateSchedule,
    compute_prior_balance,
    pay_period_for,
    rate_or_current,
    summarize_week,
)
from timeclock_kernel.domain import (
    DayResult,
    PayrollSnapshot,
    Worker,
    WeeklySummary,
    round_money,
)
from timeclock_kernel.exceptions import WorkerNotFoundError
from timeclock_kernel.logging_config import LogContext, get_logger
from timeclock_kernel.selectors import PayrollSelector
from timeclock_services._report_types import (
    Paystub,
    PaystubDay,
    PaystubPair,
    PaystubPayout,
    PaystubPeriod,
    PaystubSummary,
    PaystubWorker,
)

logger = get_logger("services.paystub")


def period_info(period: PayPeriod) -> PaystubPeriod:
    return PaystubPeriod(start=period.start, end=period.end, label=period.label)


def build_daily_breakdown(
    days: Iterable[DayResult],
    period: PayPeriod,
) -> tuple[PaystubDay, ...]:
    """One row per calendar day of ``period``, empty rows for days off."""
    by_date = {d.work_date: d for d in days}
    rows: list[PaystubDay] = []
    for day in period.days():
        result = by_date.get(day)
        if result is None:
            rows.append(PaystubDay(work_date=day, day_of_week=f"{day:%A}"))
            continue
        rows.append(
            PaystubDay(
                work_date=day,
                day_of_week=f"{day:%A}",
                pairs=tuple(
                    PaystubPair(
                        clock_in=p.clock_in.timestamp,
                        clock_out=p.clock_out.timestamp if p.clock_out else None,
                        hours=round_money(p.hours),
                    )
                    for p in result.pairs
                ),
                day_total=round_money(result.total_hours),
                has_issue=result.has_issue,
            )
        )
    return tuple(rows)


class PaystubService:
    """
    Builds paystubs from a snapshot.

    Contract:
        ``build_paystubs`` is pure over its snapshot; ``load_snapshot`` is
        the one method that touches the database, reading everything from
        the accounting-start date through the end of the requested week.
    """

    def __init__(self, settings: PayrollSettings | None = None):
        self.settings = settings or get_settings()

    def load_snapshot(
        self,
        session: Session,
        week_of: date,
        worker_id: UUID | None = None,
    ) -> PayrollSnapshot:
        period = pay_period_for(week_of)
        start = min(self.settings.accounting_start_date, period.start)
        return PayrollSelector(session).load_snapshot(
            start,
            period.end,
            worker_ids=[worker_id] if worker_id is not None else None,
        )

    def _select_workers(
        self,
        snapshot: PayrollSnapshot,
        worker_id: UUID | None,
    ) -> list[Worker]:
        if worker_id is None:
            return [w for w in snapshot.workers if w.active]
        worker = snapshot.worker(worker_id)
        if worker is None:
            raise WorkerNotFoundError(str(worker_id))
        return [worker]

    def build_paystubs(
        self,
        snapshot: PayrollSnapshot,
        week_of: date,
        worker_id: UUID | None = None,
    ) -> list[Paystub]:
        """
        Paystubs for the week containing ``week_of``.

        Args:
            snapshot: Inputs read in one consistent transaction.  Must hold
                punches and payouts back to the accounting-start date for
                the prior balance to be complete.
            week_of: Any day of the pay week.
            worker_id: Only this worker (included even when inactive).
                Default: every active worker.
        """
        period = pay_period_for(week_of)
        workers = self._select_workers(snapshot, worker_id)
        schedule = RateSchedule.from_records(snapshot.rate_history)

        paystubs: list[Paystub] = []
        with LogContext.bind(pay_period=period.label):
            for worker in workers:
                with LogContext.bind(worker_id=str(worker.id)):
                    paystub = self._build_one(worker, period, snapshot, schedule)
                if paystub is not None:
                    paystubs.append(paystub)

            logger.info(
                "paystubs_built",
                extra={
                    "week_start": period.start.isoformat(),
                    "workers_considered": len(workers),
                    "paystubs": len(paystubs),
                },
            )
        return paystubs

    def _build_one(
        self,
        worker: Worker,
        period: PayPeriod,
        snapshot: PayrollSnapshot,
        schedule: RateSchedule,
    ) -> Paystub | None:
        tz = self.settings.tzinfo
        rate = rate_or_current(worker, schedule.rate_on(worker.id, period.start))
        summary = summarize_week(
            worker=worker,
            week_start=period.start,
            events=snapshot.events_for(worker.id),
            payouts=snapshot.payouts_for(worker.id),
            rate=rate,
            tz=tz,
        )
        if summary is None:
            return None
        prior = compute_prior_balance(
            worker=worker,
            current_week_start=period.start,
            events=snapshot.events_for(worker.id),
            payouts=snapshot.payouts_for(worker.id),
            schedule=schedule,
            floor_date=self.settings.accounting_start_date,
            rounding=self.settings.carry_forward_rounding,
            tz=tz,
        )
        return self._paystub(worker, period, summary, snapshot, prior.amount)

    def _paystub(
        self,
        worker: Worker,
        period: PayPeriod,
        summary: WeeklySummary,
        snapshot: PayrollSnapshot,
        prior_balance: Decimal,
    ) -> Paystub:
        multiplier = worker.overtime.multiplier
        payouts = sorted(
            (p for p in snapshot.payouts_for(worker.id) if period.contains(p.paid_on)),
            key=lambda p: p.paid_on,
        )
        return Paystub(
            worker=PaystubWorker(
                id=worker.id,
                name=worker.display_name,
                code=worker.code,
                pay_rate=worker.pay_rate,
            ),
            period=period_info(period),
            daily_breakdown=build_daily_breakdown(summary.days, period),
            payouts=tuple(
                PaystubPayout(
                    paid_on=p.paid_on,
                    kind=p.kind.value,
                    description=p.description,
                    amount=round_money(p.amount),
                )
                for p in payouts
            ),
            summary=PaystubSummary(
                total_hours=round_money(summary.total_hours),
                regular_hours=round_money(summary.regular_hours),
                overtime_hours=round_money(summary.overtime_hours),
                regular_pay=round_money(summary.regular_pay),
                overtime_pay=round_money(summary.overtime_pay),
                gross_pay=round_money(summary.gross_pay),
                total_payouts=round_money(summary.total_payouts),
                net_pay=round_money(summary.net_pay),
                pay_rate=summary.rate,
                overtime_rate=round_money(summary.rate * multiplier),
                overtime_multiplier=multiplier,
                total_paid=round_money(summary.total_paid),
                balance_due=summary.balance_due,
                prior_balance=prior_balance,
            ),
        )
