"""
Pay periods: Monday-to-Sunday weeks.

Pure date arithmetic shared by the weekly summary, the carry-forward walk
and the reporting services.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from timeclock_kernel.exceptions import InvalidPayPeriodError

_ONE_WEEK = timedelta(days=7)


def week_start(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


def week_bounds(day: date) -> tuple[date, date]:
    """(Monday, Sunday) of the week containing ``day``."""
    start = week_start(day)
    return start, start + timedelta(days=6)


def format_period_label(start: date, end: date) -> str:
    """``"Mar 2 - Mar 8, 2026"``."""
    return f"{start:%b} {start.day} - {end:%b} {end.day}, {end.year}"


@dataclass(frozen=True)
class PayPeriod:
    start: date
    end: date

    @property
    def label(self) -> str:
        return format_period_label(self.start, self.end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def days(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range((self.end - self.start).days + 1)]


def pay_period_for(day: date) -> PayPeriod:
    start, end = week_bounds(day)
    return PayPeriod(start=start, end=end)


def require_week_start(day: date) -> None:
    if day.weekday() != 0:
        raise InvalidPayPeriodError(
            day.isoformat(),
            (day + timedelta(days=6)).isoformat(),
            "pay periods start on Monday",
        )


def all_pay_periods(start: date, end: date) -> list[PayPeriod]:
    """Every week overlapping ``[start, end]``, oldest first."""
    if end < start:
        raise InvalidPayPeriodError(start.isoformat(), end.isoformat(), "end precedes start")
    periods: list[PayPeriod] = []
    current = week_start(start)
    while current <= end:
        periods.append(PayPeriod(start=current, end=current + timedelta(days=6)))
        current += _ONE_WEEK
    return periods
