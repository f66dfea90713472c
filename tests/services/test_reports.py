"""Tests for the timesheet and dashboard services."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from timeclock_kernel.domain import PayoutKind, PayrollSnapshot
from timeclock_kernel.exceptions import InvalidPayPeriodError
from timeclock_kernel.models import PayoutModel, PunchModel
from timeclock_services import (
    PayRateService,
    build_dashboard,
    build_timesheet,
    load_dashboard_snapshot,
)
from tests.conftest import make_event, make_payout, make_rate, make_shift, make_worker

MONDAY = date(2026, 3, 2)


def _long_week(worker):
    events = []
    for i in range(5):
        events.extend(make_shift(worker, MONDAY + timedelta(days=i), 8, 9))
    return events


# ===========================================================================
# Timesheet
# ===========================================================================


class TestTimesheet:

    def test_rows_per_worker_with_punches(self, settings):
        a = make_worker(code="A", name="Ana")
        b = make_worker(code="B", name="")
        c = make_worker(code="C")
        events = _long_week(a) + make_shift(b, MONDAY, 8, 8)
        snapshot = PayrollSnapshot(workers=(a, b, c), events=tuple(events))

        sheet = build_timesheet(snapshot, MONDAY, settings)

        assert [r.worker_name for r in sheet.rows] == ["Ana", "B"]
        assert sheet.period.label == "Mar 2 - Mar 8, 2026"

    def test_hours_split(self, settings):
        worker = make_worker()
        snapshot = PayrollSnapshot(workers=(worker,), events=tuple(_long_week(worker)))

        (row,) = build_timesheet(snapshot, MONDAY, settings).rows

        assert row.total_hours == Decimal("45.00")
        assert row.regular_hours == Decimal("40.00")
        assert row.overtime_hours == Decimal("5.00")
        assert len(row.days) == 7

    def test_issue_count(self, settings):
        worker = make_worker()
        events = make_shift(worker, MONDAY, 8, 8) + [make_event(worker, datetime(2026, 3, 4, 8, 0))]
        snapshot = PayrollSnapshot(workers=(worker,), events=tuple(events))

        (row,) = build_timesheet(snapshot, MONDAY, settings).rows

        assert row.issue_count == 1

    def test_inactive_workers_optional(self, settings):
        worker = make_worker(active=False)
        snapshot = PayrollSnapshot(workers=(worker,), events=tuple(make_shift(worker, MONDAY, 8, 8)))

        assert build_timesheet(snapshot, MONDAY, settings).rows == ()
        assert len(build_timesheet(snapshot, MONDAY, settings, include_inactive=True).rows) == 1


# ===========================================================================
# Dashboard
# ===========================================================================


class TestDashboard:

    def test_headline_figures(self, settings):
        a = make_worker(code="A", name="Ana", pay_rate="30")
        b = make_worker(code="B", name="Ben", pay_rate="15")
        inactive = make_worker(code="C", active=False)
        events = (
            _long_week(a)
            + make_shift(b, MONDAY, 8, 8)
            + [make_event(b, datetime(2026, 3, 3, 8, 0))]
            + make_shift(inactive, MONDAY, 8, 8)
        )
        payouts = (
            make_payout(a, "100", PayoutKind.ADVANCE, MONDAY),
            make_payout(b, "25", PayoutKind.LOAN, MONDAY + timedelta(days=1)),
            make_payout(b, "300", PayoutKind.PAYMENT, MONDAY + timedelta(days=4)),
        )
        records = (make_rate(a, "20", date(2026, 1, 1)),)
        snapshot = PayrollSnapshot(
            workers=(a, b, inactive),
            events=tuple(events),
            payouts=payouts,
            rate_history=records,
        )

        stats = build_dashboard(snapshot, MONDAY, MONDAY + timedelta(days=6), settings)

        assert stats.active_workers == 2
        assert stats.total_hours == Decimal("53.00")
        assert stats.overtime_hours == Decimal("5.00")
        # Ana at her historical $20: 40*20 + 5*30; Ben at current $15: 8*15
        assert stats.total_cost == Decimal("1070.00")
        assert stats.missing_punches == 1
        assert stats.total_payouts == Decimal("125.00")
        assert [(w.name, w.regular, w.overtime) for w in stats.worker_hours] == [
            ("Ana", Decimal("40.00"), Decimal("5.00")),
            ("Ben", Decimal("8.00"), Decimal("0.00")),
        ]

    def test_range_filters_events(self, settings):
        worker = make_worker(pay_rate="10")
        snapshot = PayrollSnapshot(workers=(worker,), events=tuple(_long_week(worker)))

        stats = build_dashboard(snapshot, MONDAY, MONDAY, settings)

        assert stats.total_hours == Decimal("9.00")
        assert stats.total_cost == Decimal("90.00")

    def test_to_dict(self, settings):
        stats = build_dashboard(PayrollSnapshot(), MONDAY, MONDAY + timedelta(days=6), settings)

        data = stats.to_dict()

        assert data["total_hours"] == "0.00"
        assert data["active_workers"] == 0
        assert data["worker_hours"] == []

    def test_reversed_range_rejected(self, settings):
        with pytest.raises(InvalidPayPeriodError):
            build_dashboard(PayrollSnapshot(), MONDAY, MONDAY - timedelta(days=1), settings)


class TestDashboardFromDatabase:

    def test_inactive_worker_payouts_counted(self, session, deterministic_clock, settings):
        rates = PayRateService(session, deterministic_clock, settings)
        ana, _ = rates.create_worker(code="101", name="Ana", pay_rate=Decimal("20"))
        ben, _ = rates.create_worker(code="102", name="Ben", pay_rate=Decimal("15"), active=False)
        session.add_all([
            PunchModel(worker_id=ana.id, timestamp=datetime(2026, 3, 2, 8, 0)),
            PunchModel(worker_id=ana.id, timestamp=datetime(2026, 3, 2, 16, 0)),
            PayoutModel(
                worker_id=ana.id, amount=Decimal("50"),
                kind=PayoutKind.ADVANCE.value, paid_on=MONDAY,
            ),
            PayoutModel(
                worker_id=ben.id, amount=Decimal("30"),
                kind=PayoutKind.LOAN.value, paid_on=MONDAY + timedelta(days=2),
            ),
        ])
        session.flush()
        end = MONDAY + timedelta(days=6)

        stats = build_dashboard(load_dashboard_snapshot(session, MONDAY, end), MONDAY, end, settings)

        assert stats.active_workers == 1
        assert stats.total_hours == Decimal("8.00")
        assert stats.total_payouts == Decimal("80.00")
        assert [w.name for w in stats.worker_hours] == ["Ana"]
