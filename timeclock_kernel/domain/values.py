"""
Values -- Immutable, self-validating domain value objects.

Responsibility:
    The nouns the payroll core consumes from storage: clock events (punches),
    workers with their overtime policy, append-only pay-rate history and
    payouts.  Also the single sanctioned rounding helper for money and hours.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every engine and service.  No outward dependencies.

Invariants enforced:
    * All models are ``frozen=True`` (immutable after construction).
    * All hour, rate and money fields use ``Decimal`` -- NEVER ``float``.
    * ``PunchType`` is an opaque tag; pairing never reads it.
    * ``round_money`` rounds half-up; it is the only rounding function used
      at output boundaries.

Failure modes:
    * Negative pay rates, payout amounts or overtime thresholds raise
      ``ValueError`` at construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from uuid import UUID

MONEY_DECIMAL_PLACES = 2

ZERO = Decimal("0")


def round_money(value: Decimal, decimal_places: int = MONEY_DECIMAL_PLACES) -> Decimal:
    """Round a monetary (or hour) figure half-up to ``decimal_places``.

    Preconditions: value is a Decimal.
    Postconditions: Returns value quantized, e.g. 2.345 -> 2.35, -2.345 -> -2.35.
    """
    quantum = Decimal(1).scaleb(-decimal_places)
    return value.quantize(quantum, rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class PunchType(str, Enum):
    """Presentational clock-in/out tag. Pairing is positional."""
    IN = "in"
    OUT = "out"
    UNKNOWN = "unknown"


class PunchSource(str, Enum):
    """Where a punch came from."""
    IMPORT = "import"
    MANUAL = "manual"


class PayoutKind(str, Enum):
    """Payout kinds.

    ``PAYMENT`` and ``LOAN_REPAYMENT`` reduce the outstanding balance; the
    other kinds are deductions from what is still owed.
    """
    ADVANCE = "advance"
    LOAN = "loan"
    PAYMENT = "payment"
    LOAN_REPAYMENT = "loan_repayment"

    @property
    def is_balance_reducing(self) -> bool:
        return self in (PayoutKind.PAYMENT, PayoutKind.LOAN_REPAYMENT)


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ClockEvent:
    """One observed punch.

    ``timestamp`` is either naive (already local wall-clock time) or aware,
    in which case grouping converts it to the deployment timezone.
    """
    id: UUID
    worker_id: UUID
    timestamp: datetime
    punch_type: PunchType = PunchType.UNKNOWN
    is_manual: bool = False
    source: PunchSource = PunchSource.IMPORT
    raw_line: str | None = None


@dataclass(frozen=True)
class RawPunch:
    """A punch as produced by the attendance-log parser, before workers are resolved."""
    worker_code: str
    timestamp: datetime
    raw_line: str = ""


@dataclass(frozen=True)
class OvertimePolicy:
    """Weekly overtime rule for one worker."""
    enabled: bool = True
    threshold_hours: Decimal = Decimal("40")
    multiplier: Decimal = Decimal("1.5")

    def __post_init__(self) -> None:
        if self.threshold_hours < ZERO:
            raise ValueError(
                f"threshold_hours cannot be negative: {self.threshold_hours}"
            )
        if self.multiplier <= ZERO:
            raise ValueError(f"multiplier must be positive: {self.multiplier}")


@dataclass(frozen=True)
class Worker:
    """A worker as seen by payroll.

    ``pay_rate`` is the current rate; historical rates come from
    ``RateHistoryRecord`` rows.
    """
    id: UUID
    code: str
    name: str = ""
    pay_rate: Decimal = ZERO
    overtime: OvertimePolicy = field(default_factory=OvertimePolicy)
    active: bool = True
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.pay_rate < ZERO:
            raise ValueError(f"pay_rate cannot be negative: {self.pay_rate}")

    @property
    def display_name(self) -> str:
        return self.name or self.code


@dataclass(frozen=True)
class RateHistoryRecord:
    """Append-only pay-rate change. Ordered by ``effective_from`` they form a step function."""
    id: UUID
    worker_id: UUID
    rate: Decimal
    effective_from: date
    created_at: datetime

    def __post_init__(self) -> None:
        if self.rate < ZERO:
            raise ValueError(f"rate cannot be negative: {self.rate}")


@dataclass(frozen=True)
class Payout:
    """Money given to or received from a worker outside of the paycheck."""
    id: UUID
    worker_id: UUID
    amount: Decimal
    kind: PayoutKind
    paid_on: date
    description: str = ""
    method: str | None = None

    def __post_init__(self) -> None:
        if self.amount < ZERO:
            raise ValueError(f"Payout amount cannot be negative: {self.amount}")


class CarryForwardRounding(str, Enum):
    """How historical weeks are rounded before they are summed into a prior balance.

    ``PER_WEEK`` rounds each week's net pay and payments to cents, floors the
    difference at zero, sums, then rounds the sum.  ``FINAL_ONLY`` floors the
    unrounded weekly differences and rounds once at the end.  The two can
    differ by a few cents over many weeks.
    """
    PER_WEEK = "per_week"
    FINAL_ONLY = "final_only"
