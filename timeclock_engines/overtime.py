"""
Overtime Splitter (``timeclock_engines.overtime``).

Responsibility
--------------
Splits a period's total hours into regular and overtime hours under a
worker's weekly ``OvertimePolicy`` and prices them at a given rate.

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O.

Invariants enforced
-------------------
* Disabled policy, or total at/below the threshold: everything is regular.
* Otherwise regular = threshold, overtime = total - threshold.
* Non-negative input never yields a negative split.
* No rounding: callers round at the output boundary.
"""

from __future__ import annotations

from decimal import Decimal

from timeclock_kernel.domain.dtos import OvertimeSplit, PayBreakdown
from timeclock_kernel.domain.values import ZERO, OvertimePolicy


def split_hours(total_hours: Decimal, policy: OvertimePolicy) -> OvertimeSplit:
    """Split total hours into regular and overtime."""
    if not policy.enabled or total_hours <= policy.threshold_hours:
        return OvertimeSplit(regular_hours=total_hours, overtime_hours=ZERO)
    return OvertimeSplit(
        regular_hours=policy.threshold_hours,
        overtime_hours=total_hours - policy.threshold_hours,
    )


def compute_pay(
    total_hours: Decimal,
    rate: Decimal,
    policy: OvertimePolicy,
) -> PayBreakdown:
    """Price a period's hours.

    ``regular_pay = regular * rate``;
    ``overtime_pay = overtime * rate * multiplier``.
    """
    split = split_hours(total_hours, policy)
    return PayBreakdown(
        split=split,
        rate=rate,
        multiplier=policy.multiplier,
        regular_pay=split.regular_hours * rate,
        overtime_pay=split.overtime_hours * rate * policy.multiplier,
    )
