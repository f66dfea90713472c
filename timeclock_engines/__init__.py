"""
Module: timeclock_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines.  This is the canonical import surface for higher
    layers (timeclock_services).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import timeclock_kernel.domain, timeclock_kernel.exceptions,
    timeclock_kernel.logging_config and sibling engine modules.
    MUST NOT import timeclock_services, timeclock_config or the kernel's
    db/models/selectors.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      Anything time-dependent receives a ``Clock``.
    - Decimal-only arithmetic for hours, rates and money.
    - Determinism: identical inputs always produce identical outputs.
"""

from timeclock_engines.carry_forward import compute_prior_balance
from timeclock_engines.double_punch import (
    DEFAULT_MIN_GAP_SECONDS,
    DoublePunchResult,
    filter_double_punches,
)
from timeclock_engines.overtime import compute_pay, split_hours
from timeclock_engines.pay_periods import (
    PayPeriod,
    all_pay_periods,
    format_period_label,
    pay_period_for,
    week_bounds,
    week_start,
)
from timeclock_engines.punch_pairing import (
    elapsed_hours,
    group_by_local_day,
    pair_day,
    pair_events,
    to_local_date,
)
from timeclock_engines.rate_history import (
    RateSchedule,
    effective_rate,
    effective_rates,
    rate_correction,
    rate_or_current,
    record_rate_change,
    seed_rate_history,
)
from timeclock_engines.weekly_summary import (
    summarize_week,
    summarize_workers,
    total_deductions,
    total_paid,
)

__all__ = [
    "compute_prior_balance",
    "DEFAULT_MIN_GAP_SECONDS",
    "DoublePunchResult",
    "filter_double_punches",
    "compute_pay",
    "split_hours",
    "PayPeriod",
    "all_pay_periods",
    "format_period_label",
    "pay_period_for",
    "week_bounds",
    "week_start",
    "elapsed_hours",
    "group_by_local_day",
    "pair_day",
    "pair_events",
    "to_local_date",
    "RateSchedule",
    "effective_rate",
    "effective_rates",
    "rate_correction",
    "rate_or_current",
    "record_rate_change",
    "seed_rate_history",
    "summarize_week",
    "summarize_workers",
    "total_deductions",
    "total_paid",
]
