"""
Pytest fixtures for the timeclock test suite.

Engine tests build domain objects directly with the ``make_*`` factories.
Selector and service tests run against an in-memory SQLite database that
is created fresh for every test.
"""

import json
import logging
from collections.abc import Generator
from datetime import date, datetime
from decimal import Decimal
from io import StringIO
from uuid import UUID, uuid4

import pytest
from sqlalchemy.orm import Session

from timeclock_config import PayrollSettings
from timeclock_kernel.db import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from timeclock_kernel.domain import (
    ClockEvent,
    DeterministicClock,
    OvertimePolicy,
    Payout,
    PayoutKind,
    RateHistoryRecord,
    Worker,
)
from timeclock_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture timeclock logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            compute_prior_balance(...)
            logs = captured_logs()
            assert any(r["message"] == "prior_balance_computed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("timeclock")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain factories
# =============================================================================


def make_worker(
    pay_rate: str = "20",
    code: str = "101",
    name: str = "Test Worker",
    overtime: OvertimePolicy | None = None,
    active: bool = True,
    worker_id: UUID | None = None,
) -> Worker:
    return Worker(
        id=worker_id or uuid4(),
        code=code,
        name=name,
        pay_rate=Decimal(pay_rate),
        overtime=overtime or OvertimePolicy(),
        active=active,
        created_at=datetime(2026, 1, 1, 9, 0),
    )


def make_event(worker: Worker, timestamp: datetime) -> ClockEvent:
    return ClockEvent(id=uuid4(), worker_id=worker.id, timestamp=timestamp)


def make_shift(worker: Worker, day: date, start_hour: int, hours: int) -> list[ClockEvent]:
    """Clock-in at ``start_hour`` and clock-out ``hours`` later on ``day``."""
    start = datetime(day.year, day.month, day.day, start_hour, 0)
    end = datetime(day.year, day.month, day.day, start_hour + hours, 0)
    return [make_event(worker, start), make_event(worker, end)]


def make_payout(
    worker: Worker,
    amount: str,
    kind: PayoutKind,
    paid_on: date,
    description: str = "",
) -> Payout:
    return Payout(
        id=uuid4(),
        worker_id=worker.id,
        amount=Decimal(amount),
        kind=kind,
        paid_on=paid_on,
        description=description,
    )


def make_rate(
    worker: Worker,
    rate: str,
    effective_from: date,
    created_at: datetime | None = None,
) -> RateHistoryRecord:
    return RateHistoryRecord(
        id=uuid4(),
        worker_id=worker.id,
        rate=Decimal(rate),
        effective_from=effective_from,
        created_at=created_at or datetime(
            effective_from.year, effective_from.month, effective_from.day, 9, 0,
        ),
    )


# =============================================================================
# Clock and settings fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    return DeterministicClock(datetime(2026, 3, 2, 12, 0))


@pytest.fixture
def settings() -> PayrollSettings:
    return PayrollSettings(accounting_start_date=date(2026, 2, 16))


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """Fresh in-memory database per test; rolled back and dropped afterwards."""
    init_engine_from_url(TEST_DATABASE_URL)
    create_tables()
    db_session = get_session()
    try:
        yield db_session
    finally:
        db_session.rollback()
        db_session.close()
        drop_tables()
        reset_engine()
