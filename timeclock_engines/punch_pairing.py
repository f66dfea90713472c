"""
Punch Pairing Engine (``timeclock_engines.punch_pairing``).

Responsibility
--------------
Turns a flat list of one worker's clock events into local calendar days of
worked intervals:

* grouping by the event's date in the deployment timezone (not UTC)
* positional pairing of the day's sorted punches: (0,1), (2,3), ...
* flagging days with an odd punch count for review

Architecture position
---------------------
**Engines layer** -- pure functional core.  ZERO I/O, ZERO database,
ZERO clock reads.

Invariants enforced
-------------------
* Pairing never reads ``ClockEvent.punch_type``.
* Sorting is stable: equal timestamps keep their input order.
* ``has_issue`` is True iff the day's event count is odd.  An unmatched
  trailing punch contributes 0 hours; the day's complete pairs still count.
* Same input, same output.  No hidden state.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta, tzinfo
from decimal import Decimal

from timeclock_kernel.domain.dtos import DayResult, PunchPair
from timeclock_kernel.domain.values import ZERO, ClockEvent
from timeclock_kernel.logging_config import get_logger

logger = get_logger("engines.punch_pairing")

_ONE_MILLISECOND = timedelta(milliseconds=1)
_MILLISECONDS_PER_HOUR = Decimal(3_600_000)


def to_local_date(timestamp: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of ``timestamp`` in the deployment timezone.

    Naive timestamps are already local wall-clock time.  Aware timestamps
    are converted to ``tz`` when one is given.
    """
    if tz is not None and timestamp.tzinfo is not None:
        return timestamp.astimezone(tz).date()
    return timestamp.date()


def elapsed_hours(start: datetime, end: datetime) -> Decimal:
    """Hours between two instants, from whole milliseconds."""
    return Decimal((end - start) // _ONE_MILLISECOND) / _MILLISECONDS_PER_HOUR


def group_by_local_day(
    events: Iterable[ClockEvent],
    tz: tzinfo | None = None,
) -> dict[date, list[ClockEvent]]:
    """Group events by local calendar date.

    Events 5 minutes apart that straddle local midnight land on different
    days.  Lists keep the input order; ``pair_day`` sorts them.
    """
    groups: dict[date, list[ClockEvent]] = {}
    for event in events:
        groups.setdefault(to_local_date(event.timestamp, tz), []).append(event)
    return groups


def pair_day(
    events: Sequence[ClockEvent],
    tz: tzinfo | None = None,
) -> DayResult:
    """Pair one day's events positionally into worked intervals.

    Args:
        events: All punches of a single local day, in any order.
        tz: Deployment timezone used to label the day.

    Returns:
        DayResult with pairs in chronological order.  An empty input gives
        an empty day with ``work_date=None``.
    """
    ordered = sorted(events, key=lambda e: e.timestamp)
    if not ordered:
        return DayResult(work_date=None)

    pairs: list[PunchPair] = []
    for i in range(0, len(ordered), 2):
        clock_in = ordered[i]
        clock_out = ordered[i + 1] if i + 1 < len(ordered) else None
        hours = (
            elapsed_hours(clock_in.timestamp, clock_out.timestamp)
            if clock_out is not None
            else ZERO
        )
        pairs.append(PunchPair(clock_in=clock_in, clock_out=clock_out, hours=hours))

    total_hours = sum((p.hours for p in pairs), ZERO)
    has_issue = len(ordered) % 2 == 1
    work_date = to_local_date(ordered[0].timestamp, tz)

    if has_issue:
        logger.debug(
            "unpaired_punch_day",
            extra={
                "worker_id": str(ordered[0].worker_id),
                "work_date": work_date.isoformat(),
                "event_count": len(ordered),
            },
        )

    return DayResult(
        work_date=work_date,
        pairs=tuple(pairs),
        total_hours=total_hours,
        has_issue=has_issue,
    )


def pair_events(
    events: Iterable[ClockEvent],
    tz: tzinfo | None = None,
) -> list[DayResult]:
    """Group and pair events, returning one DayResult per day in date order."""
    groups = group_by_local_day(events, tz)
    return [pair_day(groups[d], tz) for d in sorted(groups)]
