"""
timeclock_services.timesheet_service -- Weekly timesheet grid.

One row per worker with punches in the week: the seven-day breakdown,
the week total and the regular/overtime split, rounded for display.
Pay is not computed here, so no rate is resolved.
"""

from __future__ import annotations

from datetime import date

from timeclock_config import PayrollSettings
from timeclock_engines import pay_period_for, pair_events, split_hours, to_local_date
from timeclock_kernel.domain import ZERO, PayrollSnapshot, round_money
from timeclock_kernel.logging_config import get_logger
from timeclock_services._report_types import Timesheet, TimesheetRow
from timeclock_services.paystub_service import build_daily_breakdown, period_info

logger = get_logger("services.timesheet")


def build_timesheet(
    snapshot: PayrollSnapshot,
    week_of: date,
    settings: PayrollSettings | None = None,
    include_inactive: bool = False,
) -> Timesheet:
    """Timesheet for the week containing ``week_of``."""
    period = pay_period_for(week_of)
    tz = settings.tzinfo if settings is not None else None

    rows: list[TimesheetRow] = []
    for worker in snapshot.workers:
        if not worker.active and not include_inactive:
            continue
        events = [
            e for e in snapshot.events_for(worker.id)
            if period.contains(to_local_date(e.timestamp, tz))
        ]
        if not events:
            continue
        days = pair_events(events, tz)
        total = sum((d.total_hours for d in days), ZERO)
        split = split_hours(total, worker.overtime)
        rows.append(
            TimesheetRow(
                worker_id=worker.id,
                worker_name=worker.display_name,
                days=build_daily_breakdown(days, period),
                total_hours=round_money(total),
                regular_hours=round_money(split.regular_hours),
                overtime_hours=round_money(split.overtime_hours),
            )
        )

    logger.debug(
        "timesheet_built",
        extra={"week_start": period.start.isoformat(), "rows": len(rows)},
    )
    return Timesheet(period=period_info(period), rows=tuple(rows))
