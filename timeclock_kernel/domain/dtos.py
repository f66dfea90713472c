"""
Data Transfer Objects -- derived payroll results.

Responsibility:
    Immutable result types produced by the engines: paired days, overtime
    splits, pay breakdowns, weekly summaries and carry-forward balances,
    plus ``PayrollSnapshot``, the single consistent read of inputs that one
    computation runs against.

Architecture position:
    Kernel > Domain -- pure data definitions with ZERO I/O.

Invariants enforced:
    * Derived objects are never persisted; they are recomputed on every query.
    * ``WeeklySummary.balance_due`` and ``PriorBalance.amount`` are never negative.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from uuid import UUID

from timeclock_kernel.domain.values import (
    ZERO,
    ClockEvent,
    Payout,
    RateHistoryRecord,
    Worker,
)


@dataclass(frozen=True)
class PunchPair:
    """One worked interval. ``clock_out`` is None for an unmatched trailing punch."""
    clock_in: ClockEvent
    clock_out: ClockEvent | None
    hours: Decimal


@dataclass(frozen=True)
class DayResult:
    """All punches of one local calendar day, paired positionally."""
    work_date: date | None
    pairs: tuple[PunchPair, ...] = ()
    total_hours: Decimal = ZERO
    has_issue: bool = False

    @property
    def event_count(self) -> int:
        return sum(1 if p.clock_out is None else 2 for p in self.pairs)


@dataclass(frozen=True)
class OvertimeSplit:
    regular_hours: Decimal
    overtime_hours: Decimal

    @property
    def total_hours(self) -> Decimal:
        return self.regular_hours + self.overtime_hours


@dataclass(frozen=True)
class PayBreakdown:
    """Pay for one period at full precision (no rounding applied)."""
    split: OvertimeSplit
    rate: Decimal
    multiplier: Decimal
    regular_pay: Decimal
    overtime_pay: Decimal

    @property
    def gross_pay(self) -> Decimal:
        return self.regular_pay + self.overtime_pay


@dataclass(frozen=True)
class WeeklySummary:
    """
    One worker's pay for one Monday-Sunday week.

    Monetary fields are full precision except ``balance_due``, which is
    rounded and floored at zero.  Round for presentation at the output
    boundary.
    """
    worker_id: UUID
    week_start: date
    week_end: date
    days: tuple[DayResult, ...]
    total_hours: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    rate: Decimal
    regular_pay: Decimal
    overtime_pay: Decimal
    gross_pay: Decimal
    total_payouts: Decimal
    net_pay: Decimal
    total_paid: Decimal
    balance_due: Decimal
    prior_balance: Decimal = ZERO

    @property
    def issue_days(self) -> tuple[DayResult, ...]:
        return tuple(d for d in self.days if d.has_issue)


@dataclass(frozen=True)
class WeekContribution:
    """One historical week's unpaid remainder feeding the prior balance."""
    week_start: date
    rate: Decimal
    net_pay: Decimal
    total_paid: Decimal
    owed: Decimal


@dataclass(frozen=True)
class PriorBalance:
    worker_id: UUID
    as_of_week: date
    amount: Decimal
    weeks: tuple[WeekContribution, ...] = ()


@dataclass(frozen=True)
class PayrollSnapshot:
    """
    Inputs for one payroll computation, read from a single consistent
    storage snapshot.  The engines have no way to detect a read that
    straddles a concurrent edit, so callers build one of these per request.
    """
    workers: tuple[Worker, ...] = ()
    events: tuple[ClockEvent, ...] = ()
    payouts: tuple[Payout, ...] = ()
    rate_history: tuple[RateHistoryRecord, ...] = ()
    _events_by_worker: dict[UUID, list[ClockEvent]] = field(
        default_factory=dict, init=False, repr=False, compare=False,
    )
    _payouts_by_worker: dict[UUID, list[Payout]] = field(
        default_factory=dict, init=False, repr=False, compare=False,
    )

    def __post_init__(self) -> None:
        for event in self.events:
            self._events_by_worker.setdefault(event.worker_id, []).append(event)
        for payout in self.payouts:
            self._payouts_by_worker.setdefault(payout.worker_id, []).append(payout)

    def worker(self, worker_id: UUID) -> Worker | None:
        for w in self.workers:
            if w.id == worker_id:
                return w
        return None

    def events_for(self, worker_id: UUID) -> tuple[ClockEvent, ...]:
        return tuple(self._events_by_worker.get(worker_id, ()))

    def payouts_for(self, worker_id: UUID) -> tuple[Payout, ...]:
        return tuple(self._payouts_by_worker.get(worker_id, ()))
