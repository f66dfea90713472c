"""
timeclock_services.pay_rate_service -- Worker creation and pay-rate edits.

Responsibility:
    The write side of rate history.  Creating a worker seeds the first
    ``pay_rate_history`` row; editing a rate appends a row dated at the
    moment of the edit; a retroactive correction appends an explicitly
    backdated row.  Rows are never updated or deleted.

Architecture position:
    Services -- composes the pure ``rate_history`` engine with the ORM
    models.  Flushes within the caller's transaction and never commits.

Failure modes:
    - WorkerNotFoundError: unknown worker id.
    - InvalidPayRateError: negative or non-finite rate.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from timeclock_config import PayrollSettings, get_settings
from timeclock_engines import rate_correction, record_rate_change, seed_rate_history
from timeclock_kernel.domain import (
    Clock,
    OvertimePolicy,
    RateHistoryRecord,
    SystemClock,
    Worker,
)
from timeclock_kernel.exceptions import InvalidPayRateError, WorkerNotFoundError
from timeclock_kernel.logging_config import get_logger
from timeclock_kernel.models import PayRateHistoryModel, WorkerModel

logger = get_logger("services.pay_rate")


class PayRateService:
    """
    Worker and rate-history writes.

    Contract:
        Every public method flushes and returns frozen domain objects; the
        caller owns commit/rollback.
    """

    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        settings: PayrollSettings | None = None,
    ):
        self.session = session
        self.clock = clock or SystemClock()
        self.settings = settings or get_settings()

    def _get_worker(self, worker_id: UUID) -> WorkerModel:
        row = self.session.get(WorkerModel, worker_id)
        if row is None:
            raise WorkerNotFoundError(str(worker_id))
        return row

    def get_by_code(self, code: str) -> Worker | None:
        stmt = select(WorkerModel).where(WorkerModel.code == code)
        row = self.session.execute(stmt).scalar_one_or_none()
        return row.to_domain() if row is not None else None

    def create_worker(
        self,
        code: str,
        name: str = "",
        pay_rate: Decimal = Decimal("0"),
        overtime: OvertimePolicy | None = None,
        active: bool = True,
    ) -> tuple[Worker, RateHistoryRecord]:
        """Insert a worker and the first rate-history record.

        The record is effective from the local date of creation.
        """
        worker_id = uuid4()
        if not pay_rate.is_finite() or pay_rate < 0:
            raise InvalidPayRateError(str(worker_id), str(pay_rate))
        policy = overtime or OvertimePolicy()
        worker = Worker(
            id=worker_id,
            code=code,
            name=name,
            pay_rate=pay_rate,
            overtime=policy,
            active=active,
            created_at=self.clock.now(),
        )
        record = seed_rate_history(worker, tz=self.settings.tzinfo)

        self.session.add(
            WorkerModel(
                id=worker.id,
                code=worker.code,
                name=worker.name,
                pay_rate=worker.pay_rate,
                overtime_enabled=policy.enabled,
                overtime_threshold=policy.threshold_hours,
                overtime_multiplier=policy.multiplier,
                active=worker.active,
                created_at=worker.created_at,
            )
        )
        self.session.flush()
        self.session.add(PayRateHistoryModel.from_domain(record))
        self.session.flush()

        logger.info(
            "worker_created",
            extra={
                "worker_id": str(worker.id),
                "code": code,
                "pay_rate": str(pay_rate),
                "effective_from": record.effective_from.isoformat(),
            },
        )
        return worker, record

    def change_pay_rate(
        self,
        worker_id: UUID,
        new_rate: Decimal,
    ) -> tuple[Worker, RateHistoryRecord | None]:
        """Set the current rate and append a history record dated today.

        Returns the updated worker and the appended record, or None when the
        rate did not change.
        """
        row = self._get_worker(worker_id)
        updated, record = record_rate_change(
            row.to_domain(), new_rate, self.clock, tz=self.settings.tzinfo,
        )
        if record is None:
            return updated, None

        row.pay_rate = updated.pay_rate
        self.session.add(PayRateHistoryModel.from_domain(record))
        self.session.flush()
        return updated, record

    def correct_pay_rate(
        self,
        worker_id: UUID,
        rate: Decimal,
        effective_from: date,
    ) -> RateHistoryRecord:
        """Append a backdated history record.

        The worker's current rate is left alone; the correction only changes
        what the history resolves to from ``effective_from`` onward.
        """
        self._get_worker(worker_id)
        record = rate_correction(worker_id, rate, effective_from, self.clock)
        self.session.add(PayRateHistoryModel.from_domain(record))
        self.session.flush()
        return record
