"""
Double-Punch Filter (``timeclock_engines.double_punch``).

Responsibility
--------------
Drops reader bounces before punches reach the pairer: a punch within
``min_gap_seconds`` of the previous *accepted* punch for the same worker
is discarded (e.g. a thumb scanned twice on a biometric reader).

Architecture position
---------------------
**Engines layer** -- pure functional core, applied on the intake side.

Invariants enforced
-------------------
* Input is sorted by (worker, timestamp) before the sweep; the result does
  not depend on input order.
* One running "last accepted timestamp" per worker.  The sweep is not
  retroactive: a discarded punch never becomes the new reference point.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Generic, TypeVar

from timeclock_kernel.domain.values import ClockEvent, RawPunch
from timeclock_kernel.logging_config import get_logger

logger = get_logger("engines.double_punch")

DEFAULT_MIN_GAP_SECONDS = 60

PunchT = TypeVar("PunchT", ClockEvent, RawPunch)


@dataclass(frozen=True)
class DoublePunchResult(Generic[PunchT]):
    kept: tuple[PunchT, ...]
    discarded: tuple[PunchT, ...]

    @property
    def discarded_count(self) -> int:
        return len(self.discarded)


def _worker_key(punch: ClockEvent | RawPunch) -> Hashable:
    if isinstance(punch, RawPunch):
        return punch.worker_code
    return str(punch.worker_id)


def filter_double_punches(
    punches: Iterable[PunchT],
    min_gap_seconds: int = DEFAULT_MIN_GAP_SECONDS,
) -> DoublePunchResult[PunchT]:
    """Discard punches closer than ``min_gap_seconds`` to the previous kept one.

    Args:
        punches: Clock events or raw parser punches, any workers, any order.
        min_gap_seconds: Minimum gap; a gap exactly equal to it is kept.

    Returns:
        DoublePunchResult with ``kept`` in (worker, timestamp) order.
    """
    if min_gap_seconds < 0:
        raise ValueError(f"min_gap_seconds cannot be negative: {min_gap_seconds}")

    min_gap = timedelta(seconds=min_gap_seconds)
    ordered = sorted(punches, key=lambda p: (_worker_key(p), p.timestamp))

    last_accepted: dict[Hashable, datetime] = {}
    kept: list[PunchT] = []
    discarded: list[PunchT] = []

    for punch in ordered:
        key = _worker_key(punch)
        previous = last_accepted.get(key)
        if previous is not None and punch.timestamp - previous < min_gap:
            discarded.append(punch)
            continue
        last_accepted[key] = punch.timestamp
        kept.append(punch)

    if discarded:
        logger.info(
            "double_punches_discarded",
            extra={
                "discarded_count": len(discarded),
                "kept_count": len(kept),
                "min_gap_seconds": min_gap_seconds,
            },
        )

    return DoublePunchResult(kept=tuple(kept), discarded=tuple(discarded))
