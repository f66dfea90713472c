"""
Hypothesis property tests for the payroll engines.

Properties:
- Pairing is independent of input order
- Overtime split conserves hours and is never negative
- Batch and indexed rate lookups agree with the single lookup
- Double-punch filter leaves no kept gap below the minimum
- Balance due and prior balance are never negative
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from timeclock_engines import (
    RateSchedule,
    compute_prior_balance,
    effective_rate,
    effective_rates,
    filter_double_punches,
    pair_day,
    split_hours,
    summarize_week,
)
from timeclock_kernel.domain import OvertimePolicy, PayoutKind, RawPunch
from tests.conftest import make_event, make_payout, make_rate, make_shift, make_worker

DAY_START = datetime(2026, 3, 2, 0, 0)
MONDAY = date(2026, 3, 2)

hours_st = st.decimals(min_value=0, max_value=120, places=3, allow_nan=False, allow_infinity=False)
money_st = st.decimals(min_value=0, max_value=5000, places=2, allow_nan=False, allow_infinity=False)
seconds_in_day_st = st.integers(min_value=0, max_value=24 * 3600 - 1)


# ===========================================================================
# Pairing
# ===========================================================================


@given(offsets=st.lists(seconds_in_day_st, max_size=12, unique=True), data=st.data())
def test_pair_day_permutation_invariant(offsets, data):
    worker = make_worker()
    events = [make_event(worker, DAY_START + timedelta(seconds=s)) for s in offsets]
    shuffled = data.draw(st.permutations(events))

    assert pair_day(events) == pair_day(shuffled)


@given(offsets=st.lists(seconds_in_day_st, min_size=1, max_size=12))
def test_pair_day_hours_bounded_by_day(offsets):
    worker = make_worker()
    result = pair_day([make_event(worker, DAY_START + timedelta(seconds=s)) for s in offsets])

    assert Decimal("0") <= result.total_hours < Decimal("24")
    assert result.has_issue == (len(offsets) % 2 == 1)


# ===========================================================================
# Overtime
# ===========================================================================


@given(
    total=hours_st,
    threshold=st.decimals(min_value=0, max_value=80, places=2),
    enabled=st.booleans(),
)
def test_split_conserves_hours(total, threshold, enabled):
    split = split_hours(total, OvertimePolicy(enabled=enabled, threshold_hours=threshold))

    assert split.regular_hours + split.overtime_hours == total
    assert split.regular_hours >= 0
    assert split.overtime_hours >= 0
    if enabled:
        assert split.regular_hours == min(total, threshold)
        assert split.overtime_hours == max(total - threshold, 0)
    else:
        assert split.overtime_hours == 0


# ===========================================================================
# Rate history
# ===========================================================================

rate_rows_st = st.lists(
    st.tuples(
        st.integers(min_value=0, max_value=2),
        st.integers(min_value=0, max_value=60),
        st.integers(min_value=0, max_value=3),
        money_st,
    ),
    max_size=15,
)


@given(rows=rate_rows_st, probe=st.integers(min_value=-5, max_value=70))
def test_batch_and_schedule_agree_with_single(rows, probe):
    workers = [make_worker(code=str(i)) for i in range(3)]
    base = date(2026, 1, 1)
    records = [
        make_rate(
            workers[w],
            str(rate),
            base + timedelta(days=d),
            created_at=datetime(2026, 1, 1, 8 + c, 0),
        )
        for w, d, c, rate in rows
    ]
    as_of = base + timedelta(days=probe)
    ids = [w.id for w in workers]
    batch = effective_rates(records, ids, as_of)
    schedule = RateSchedule.from_records(records)

    for worker_id in ids:
        single = effective_rate(records, worker_id, as_of)
        assert batch.get(worker_id) == single
        assert schedule.rate_on(worker_id, as_of) == single


# ===========================================================================
# Double punch
# ===========================================================================


@given(
    punches=st.lists(
        st.tuples(st.sampled_from(["1", "2", "3"]), st.integers(min_value=0, max_value=600)),
        max_size=25,
    ),
    gap=st.integers(min_value=0, max_value=120),
)
def test_kept_punches_respect_gap(punches, gap):
    raw = [RawPunch(worker_code=c, timestamp=DAY_START + timedelta(seconds=s)) for c, s in punches]

    result = filter_double_punches(raw, min_gap_seconds=gap)

    assert len(result.kept) + len(result.discarded) == len(raw)
    last: dict[str, datetime] = {}
    for punch in result.kept:
        if punch.worker_code in last:
            assert punch.timestamp - last[punch.worker_code] >= timedelta(seconds=gap)
        last[punch.worker_code] = punch.timestamp


# ===========================================================================
# Balances
# ===========================================================================

payout_rows_st = st.lists(
    st.tuples(st.sampled_from(list(PayoutKind)), money_st, st.integers(min_value=0, max_value=20)),
    max_size=8,
)


@settings(suppress_health_check=[HealthCheck.too_slow])
@given(
    shift_hours=st.lists(st.integers(min_value=1, max_value=12), min_size=1, max_size=7),
    rate=money_st,
    payouts=payout_rows_st,
)
def test_balances_never_negative(shift_hours, rate, payouts):
    worker = make_worker(pay_rate=str(rate))
    floor = MONDAY - timedelta(days=14)
    events = []
    for i, hours in enumerate(shift_hours):
        events.extend(make_shift(worker, floor + timedelta(days=i * 3), 6, hours))
    payout_objs = [
        make_payout(worker, str(amount), kind, floor + timedelta(days=offset))
        for kind, amount, offset in payouts
    ]

    summary = summarize_week(
        worker=worker, week_start=MONDAY, events=events, payouts=payout_objs, rate=rate,
    )
    prior = compute_prior_balance(
        worker=worker,
        current_week_start=MONDAY,
        events=events,
        payouts=payout_objs,
        schedule=RateSchedule.from_records([]),
        floor_date=floor,
    )

    assert prior.amount >= 0
    assert all(w.owed >= 0 for w in prior.weeks)
    if summary is not None:
        assert summary.balance_due >= 0
