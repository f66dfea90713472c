"""
Pure domain layer.

This module contains value objects and result DTOs with NO dependencies on:
- ORM (SQLAlchemy)
- Database
- Time/clock reads
- I/O

All domain objects are immutable and deterministic.
"""

from timeclock_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from timeclock_kernel.domain.dtos import (
    DayResult,
    OvertimeSplit,
    PayBreakdown,
    PayrollSnapshot,
    PriorBalance,
    PunchPair,
    WeekContribution,
    WeeklySummary,
)
from timeclock_kernel.domain.values import (
    MONEY_DECIMAL_PLACES,
    CarryForwardRounding,
    ZERO,
    ClockEvent,
    OvertimePolicy,
    Payout,
    PayoutKind,
    PunchSource,
    PunchType,
    RateHistoryRecord,
    RawPunch,
    Worker,
    round_money,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "DayResult",
    "OvertimeSplit",
    "PayBreakdown",
    "PayrollSnapshot",
    "PriorBalance",
    "PunchPair",
    "WeekContribution",
    "WeeklySummary",
    "MONEY_DECIMAL_PLACES",
    "CarryForwardRounding",
    "ZERO",
    "ClockEvent",
    "OvertimePolicy",
    "Payout",
    "PayoutKind",
    "PunchSource",
    "PunchType",
    "RateHistoryRecord",
    "RawPunch",
    "Worker",
    "round_money",
]
