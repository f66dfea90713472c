"""
Payroll settings schema (``timeclock_config.schema``).

Frozen dataclass describing every tunable the payroll core reads.  Values
are produced by ``timeclock_config.loader`` from YAML; defaults mirror the
shipped ``defaults.yaml``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from timeclock_kernel.domain.values import CarryForwardRounding
from timeclock_kernel.exceptions import InvalidSettingsError
from timeclock_kernel.logging_config import get_logger

logger = get_logger("config.schema")

SUPPORTED_WEEK_STARTS = {"monday"}


@dataclass(frozen=True)
class PayrollSettings:
    """
    Configuration for payroll computations.

    Override at instantiation with deployment-specific values:

        settings = PayrollSettings(
            accounting_start_date=date(2026, 2, 16),
            timezone="America/Chicago",
        )
    """

    # Carry-forward floor: weeks before this date are never owed
    accounting_start_date: date = date(2026, 2, 16)

    # Local-day grouping
    timezone: str | None = None
    week_starts_on: str = "monday"

    # Intake
    double_punch_gap_seconds: int = 60

    # Prior-balance rounding
    carry_forward_rounding: CarryForwardRounding = CarryForwardRounding.PER_WEEK

    def __post_init__(self) -> None:
        if self.week_starts_on not in SUPPORTED_WEEK_STARTS:
            raise InvalidSettingsError(
                "week_starts_on",
                f"must be one of {sorted(SUPPORTED_WEEK_STARTS)}, got '{self.week_starts_on}'",
            )
        if self.double_punch_gap_seconds < 0:
            raise InvalidSettingsError(
                "double_punch_gap_seconds", "cannot be negative"
            )
        if self.timezone:
            try:
                ZoneInfo(self.timezone)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise InvalidSettingsError("timezone", f"unknown zone '{self.timezone}'") from exc

        logger.debug(
            "payroll_settings_initialized",
            extra={
                "accounting_start_date": self.accounting_start_date.isoformat(),
                "timezone": self.timezone,
                "double_punch_gap_seconds": self.double_punch_gap_seconds,
                "carry_forward_rounding": self.carry_forward_rounding.value,
            },
        )

    @property
    def tzinfo(self) -> tzinfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None

    def as_dict(self) -> dict[str, str | int | None]:
        return {
            "accounting_start_date": self.accounting_start_date.isoformat(),
            "timezone": self.timezone,
            "week_starts_on": self.week_starts_on,
            "double_punch_gap_seconds": self.double_punch_gap_seconds,
            "carry_forward_rounding": self.carry_forward_rounding.value,
        }
