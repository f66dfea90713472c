"""
Rate History Engine (``timeclock_engines.rate_history``).

Responsibility
--------------
Answers "what was this worker's pay rate on date D?" from the append-only
``RateHistoryRecord`` log, and produces the records that rate edits append.

* ``effective_rate`` -- single worker, single date
* ``effective_rates`` -- many workers, one date, one pass over the records
* ``RateSchedule`` -- per-request index for resolving many dates
* ``record_rate_change`` / ``seed_rate_history`` / ``rate_correction`` --
  the records a rate edit, a worker creation or a backdated fix append

Architecture position
---------------------
**Engines layer** -- pure functional core.  The clock is injected; nothing
here reads the system time or caches across calls.

Invariants enforced
-------------------
* The effective record is the one with the greatest ``effective_from <= as_of``;
  ties on ``effective_from`` go to the latest ``created_at``, then to the
  later position in the input.
* No history means ``None``.  Falling back to ``Worker.pay_rate`` is the
  caller's decision (``rate_or_current``), so misconfiguration stays visible.
* Batch and indexed lookups agree pointwise with ``effective_rate``.
* A rate edit is dated at the moment of the edit, never backdated.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable, Sequence
from dataclasses import replace
from datetime import date, datetime, tzinfo
from decimal import Decimal
from uuid import UUID, uuid4

from timeclock_kernel.domain.clock import Clock
from timeclock_kernel.domain.values import RateHistoryRecord, Worker
from timeclock_kernel.exceptions import InvalidPayRateError
from timeclock_kernel.logging_config import get_logger
from timeclock_engines.punch_pairing import to_local_date

logger = get_logger("engines.rate_history")


def _ordered(records: Iterable[RateHistoryRecord]) -> list[RateHistoryRecord]:
    """Records in step-function order; the last of a tie wins."""
    indexed = list(enumerate(records))
    indexed.sort(key=lambda ir: (ir[1].effective_from, ir[1].created_at, ir[0]))
    return [r for _, r in indexed]


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def effective_rate(
    records: Sequence[RateHistoryRecord],
    worker_id: UUID,
    as_of: date,
) -> Decimal | None:
    """Rate in force for ``worker_id`` on ``as_of``, or None without history.

    Args:
        records: Rate history in any order, any workers.
        worker_id: Worker to resolve.
        as_of: Date to resolve at.
    """
    best: RateHistoryRecord | None = None
    for record in _ordered(r for r in records if r.worker_id == worker_id):
        if record.effective_from > as_of:
            break
        best = record
    return best.rate if best is not None else None


def effective_rates(
    records: Sequence[RateHistoryRecord],
    worker_ids: Iterable[UUID],
    as_of: date,
) -> dict[UUID, Decimal]:
    """Batch form of ``effective_rate``.

    Workers without a qualifying record are absent from the result.
    """
    wanted = set(worker_ids)
    rates: dict[UUID, Decimal] = {}
    for record in _ordered(records):
        if record.worker_id in wanted and record.effective_from <= as_of:
            rates[record.worker_id] = record.rate
    return rates


class RateSchedule:
    """
    Per-worker step functions built once per request.

    Used where many dates are resolved against the same history (every
    historical week of a carry-forward walk).  Build a new one for every
    computation; it is never shared between snapshots.
    """

    def __init__(self, history: dict[UUID, tuple[RateHistoryRecord, ...]]):
        self._history = history
        self._dates = {
            worker_id: [r.effective_from for r in rows]
            for worker_id, rows in history.items()
        }

    @classmethod
    def from_records(cls, records: Iterable[RateHistoryRecord]) -> RateSchedule:
        grouped: dict[UUID, list[RateHistoryRecord]] = {}
        for record in _ordered(records):
            grouped.setdefault(record.worker_id, []).append(record)
        return cls({k: tuple(v) for k, v in grouped.items()})

    def history_for(self, worker_id: UUID) -> tuple[RateHistoryRecord, ...]:
        return self._history.get(worker_id, ())

    def rate_on(self, worker_id: UUID, as_of: date) -> Decimal | None:
        dates = self._dates.get(worker_id)
        if not dates:
            return None
        pos = bisect_right(dates, as_of)
        if pos == 0:
            return None
        return self._history[worker_id][pos - 1].rate


def rate_or_current(worker: Worker, resolved: Decimal | None) -> Decimal:
    """Caller-side fallback: the resolved historical rate, else the current rate."""
    if resolved is None:
        logger.debug(
            "rate_history_missing_using_current_rate",
            extra={"worker_id": str(worker.id), "pay_rate": str(worker.pay_rate)},
        )
        return worker.pay_rate
    return resolved


# ---------------------------------------------------------------------------
# Record production
# ---------------------------------------------------------------------------


def seed_rate_history(
    worker: Worker,
    created_at: datetime | None = None,
    tz: tzinfo | None = None,
    record_id: UUID | None = None,
) -> RateHistoryRecord:
    """First history record for a new worker, dated at the worker's creation."""
    created = created_at or worker.created_at
    if created is None:
        raise ValueError(f"Worker {worker.id} has no creation timestamp to seed history from")
    return RateHistoryRecord(
        id=record_id or uuid4(),
        worker_id=worker.id,
        rate=worker.pay_rate,
        effective_from=to_local_date(created, tz),
        created_at=created,
    )


def record_rate_change(
    worker: Worker,
    new_rate: Decimal,
    clock: Clock,
    tz: tzinfo | None = None,
    record_id: UUID | None = None,
) -> tuple[Worker, RateHistoryRecord | None]:
    """Apply a rate edit and produce the history record it appends.

    The record is effective from the local date of the edit, so payroll for
    earlier weeks is unaffected.  Retroactive fixes use ``rate_correction``.

    Returns:
        (updated worker, new record).  The record is None when the rate is
        unchanged.

    Raises:
        InvalidPayRateError: if ``new_rate`` is negative or not finite.
    """
    if not new_rate.is_finite() or new_rate < 0:
        raise InvalidPayRateError(str(worker.id), str(new_rate))
    if new_rate == worker.pay_rate:
        return worker, None

    now = clock.now()
    record = RateHistoryRecord(
        id=record_id or uuid4(),
        worker_id=worker.id,
        rate=new_rate,
        effective_from=to_local_date(now, tz),
        created_at=now,
    )
    logger.info(
        "pay_rate_changed",
        extra={
            "worker_id": str(worker.id),
            "old_rate": str(worker.pay_rate),
            "new_rate": str(new_rate),
            "effective_from": record.effective_from.isoformat(),
        },
    )
    return replace(worker, pay_rate=new_rate), record


def rate_correction(
    worker_id: UUID,
    rate: Decimal,
    effective_from: date,
    clock: Clock,
    record_id: UUID | None = None,
) -> RateHistoryRecord:
    """Explicitly backdated record for a retroactive rate correction."""
    if not rate.is_finite() or rate < 0:
        raise InvalidPayRateError(str(worker_id), str(rate))
    record = RateHistoryRecord(
        id=record_id or uuid4(),
        worker_id=worker_id,
        rate=rate,
        effective_from=effective_from,
        created_at=clock.now(),
    )
    logger.info(
        "pay_rate_corrected",
        extra={
            "worker_id": str(worker_id),
            "rate": str(rate),
            "effective_from": effective_from.isoformat(),
        },
    )
    return record
