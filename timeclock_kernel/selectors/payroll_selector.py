"""
Module: timeclock_kernel.selectors.payroll_selector
Responsibility: Loads every input one payroll computation needs -- workers,
    punches, payouts and rate history -- as a single ``PayrollSnapshot``.
Architecture position: Kernel > Selectors.  Read-only.

Invariants enforced:
    - All rows come from the caller's session, so a snapshot read inside
      one transaction is consistent; the engines cannot detect a read that
      straddles a concurrent edit.
    - Rate history is loaded in full for the selected workers regardless of
      the date range, because the step function needs records effective
      before ``start``.
    - Punches are loaded with a one-day margin on each side of the range so
      that aware timestamps can be regrouped into local days by the engines;
      the engines discard anything outside the window they summarize.
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime, time, timedelta
from uuid import UUID

from sqlalchemy import select

from timeclock_kernel.domain.dtos import PayrollSnapshot
from timeclock_kernel.domain.values import RateHistoryRecord, Worker
from timeclock_kernel.exceptions import InvalidPayPeriodError
from timeclock_kernel.logging_config import get_logger
from timeclock_kernel.models.pay_rate_history import PayRateHistoryModel
from timeclock_kernel.models.payout import PayoutModel
from timeclock_kernel.models.punch import PunchModel
from timeclock_kernel.models.worker import WorkerModel
from timeclock_kernel.selectors.base import BaseSelector

logger = get_logger("selectors.payroll")

_MARGIN = timedelta(days=1)


class PayrollSelector(BaseSelector[WorkerModel]):
    """Read side of the payroll core."""

    def load_workers(
        self,
        worker_ids: Iterable[UUID] | None = None,
        include_inactive: bool = False,
    ) -> list[Worker]:
        """Workers ordered by code.

        Explicit ``worker_ids`` are returned whether active or not.
        """
        stmt = select(WorkerModel).order_by(WorkerModel.code)
        if worker_ids is not None:
            stmt = stmt.where(WorkerModel.id.in_(list(worker_ids)))
        elif not include_inactive:
            stmt = stmt.where(WorkerModel.active.is_(True))
        return [row.to_domain() for row in self.session.execute(stmt).scalars()]

    def rate_history_for(self, worker_ids: Iterable[UUID]) -> list[RateHistoryRecord]:
        """Full rate history of ``worker_ids`` in insertion-independent order."""
        ids = list(worker_ids)
        if not ids:
            return []
        stmt = (
            select(PayRateHistoryModel)
            .where(PayRateHistoryModel.worker_id.in_(ids))
            .order_by(
                PayRateHistoryModel.worker_id,
                PayRateHistoryModel.effective_from,
                PayRateHistoryModel.created_at,
            )
        )
        return [row.to_domain() for row in self.session.execute(stmt).scalars()]

    def load_snapshot(
        self,
        start: date,
        end: date,
        worker_ids: Sequence[UUID] | None = None,
        include_inactive: bool = False,
    ) -> PayrollSnapshot:
        """
        Read one consistent snapshot for the date range ``[start, end]``.

        Args:
            start: First day whose punches and payouts are needed.  For a
                paystub with a prior balance this is the accounting-start date.
            end: Last day (inclusive).
            worker_ids: Restrict to these workers (active or not).
            include_inactive: With no ``worker_ids``, also load inactive workers.

        Raises:
            InvalidPayPeriodError: if ``end`` precedes ``start``.
        """
        if end < start:
            raise InvalidPayPeriodError(start.isoformat(), end.isoformat(), "end precedes start")

        workers = self.load_workers(worker_ids, include_inactive)
        ids = [w.id for w in workers]
        if not ids:
            return PayrollSnapshot(workers=tuple(workers))

        lower = datetime.combine(start - _MARGIN, time.min)
        upper = datetime.combine(end + _MARGIN + timedelta(days=1), time.min)
        punch_stmt = (
            select(PunchModel)
            .where(
                PunchModel.worker_id.in_(ids),
                PunchModel.timestamp >= lower,
                PunchModel.timestamp < upper,
            )
            .order_by(PunchModel.worker_id, PunchModel.timestamp)
        )
        payout_stmt = (
            select(PayoutModel)
            .where(
                PayoutModel.worker_id.in_(ids),
                PayoutModel.paid_on >= start,
                PayoutModel.paid_on <= end,
            )
            .order_by(PayoutModel.worker_id, PayoutModel.paid_on)
        )
        events = [row.to_domain() for row in self.session.execute(punch_stmt).scalars()]
        payouts = [row.to_domain() for row in self.session.execute(payout_stmt).scalars()]
        history = self.rate_history_for(ids)

        logger.debug(
            "payroll_snapshot_loaded",
            extra={
                "start": start.isoformat(),
                "end": end.isoformat(),
                "workers": len(workers),
                "events": len(events),
                "payouts": len(payouts),
                "rate_history": len(history),
            },
        )
        return PayrollSnapshot(
            workers=tuple(workers),
            events=tuple(events),
            payouts=tuple(payouts),
            rate_history=tuple(history),
        )
