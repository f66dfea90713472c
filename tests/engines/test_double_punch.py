"""
Tests for the Double-Punch Filter.

Covers:
- Discarding punches closer than the minimum gap to the last kept punch
- Non-retroactive filtering (gaps measured from the last *kept* punch)
- Per-worker independence
- Raw parser punches and stored clock events
"""

from datetime import datetime, timedelta

import pytest

from timeclock_engines.double_punch import DEFAULT_MIN_GAP_SECONDS, filter_double_punches
from timeclock_kernel.domain import RawPunch
from tests.conftest import make_event, make_worker

T0 = datetime(2026, 3, 2, 8, 0, 0)


def _raw(code: str, offset_seconds: int) -> RawPunch:
    ts = T0 + timedelta(seconds=offset_seconds)
    return RawPunch(worker_code=code, timestamp=ts, raw_line=f"{code}\t{ts:%Y-%m-%d %H:%M:%S}")


class TestDoublePunchFilter:
    """Biometric double scans are dropped at intake."""

    def test_thirty_second_repeat_discarded(self):
        worker = make_worker()
        first = make_event(worker, T0)
        repeat = make_event(worker, T0 + timedelta(seconds=30))

        result = filter_double_punches([first, repeat])

        assert result.kept == (first,)
        assert result.discarded == (repeat,)
        assert result.discarded_count == 1

    def test_ninety_second_gap_kept(self):
        worker = make_worker()
        first = make_event(worker, T0)
        second = make_event(worker, T0 + timedelta(seconds=90))

        result = filter_double_punches([first, second])

        assert result.kept == (first, second)
        assert result.discarded_count == 0

    def test_gap_equal_to_minimum_kept(self):
        punches = [_raw("7", 0), _raw("7", DEFAULT_MIN_GAP_SECONDS)]

        result = filter_double_punches(punches)

        assert len(result.kept) == 2

    def test_gap_measured_from_last_kept_punch(self):
        """0s kept, 40s dropped, 80s kept: 80s is compared against 0s, not 40s."""
        punches = [_raw("7", 0), _raw("7", 40), _raw("7", 80)]

        result = filter_double_punches(punches)

        assert [p.timestamp for p in result.kept] == [T0, T0 + timedelta(seconds=80)]
        assert result.discarded_count == 1

    def test_workers_filtered_independently(self):
        punches = [_raw("7", 0), _raw("8", 10), _raw("8", 20)]

        result = filter_double_punches(punches)

        kept_codes = [p.worker_code for p in result.kept]
        assert kept_codes == ["7", "8"]
        assert result.discarded[0].worker_code == "8"

    def test_unsorted_input(self):
        punches = [_raw("7", 30), _raw("7", 0)]

        result = filter_double_punches(punches)

        assert result.kept[0].timestamp == T0
        assert result.discarded[0].timestamp == T0 + timedelta(seconds=30)

    def test_custom_gap(self):
        punches = [_raw("7", 0), _raw("7", 90)]

        result = filter_double_punches(punches, min_gap_seconds=120)

        assert result.discarded_count == 1

    def test_zero_gap_keeps_everything(self):
        punches = [_raw("7", 0), _raw("7", 0), _raw("7", 1)]

        result = filter_double_punches(punches, min_gap_seconds=0)

        assert len(result.kept) == 3

    def test_negative_gap_rejected(self):
        with pytest.raises(ValueError):
            filter_double_punches([], min_gap_seconds=-1)

    def test_empty_input(self):
        result = filter_double_punches([])

        assert result.kept == ()
        assert result.discarded == ()

    def test_discards_logged(self, captured_logs):
        filter_double_punches([_raw("7", 0), _raw("7", 5)])

        records = [r for r in captured_logs() if r["message"] == "double_punches_discarded"]
        assert len(records) == 1
        assert records[0]["discarded_count"] == 1
