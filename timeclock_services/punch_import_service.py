"""
timeclock_services.punch_import_service -- Attendance-log intake.

Responsibility:
    Stores ``RawPunch`` records produced by the attendance-log parser:
    resolves worker codes (creating unknown workers), drops biometric
    double punches, skips punches already stored and inserts the rest as
    imported clock events.

Invariants enforced:
    - Re-importing the same log inserts nothing new.
    - Manual punches are never touched.
    - The double-punch gap comes from ``PayrollSettings``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from timeclock_config import PayrollSettings, get_settings
from timeclock_engines import filter_double_punches
from timeclock_kernel.domain import Clock, PunchSource, PunchType, RawPunch, SystemClock
from timeclock_kernel.logging_config import LogContext, get_logger
from timeclock_kernel.models import PunchModel, WorkerModel
from timeclock_services.pay_rate_service import PayRateService

logger = get_logger("services.punch_import")


@dataclass(frozen=True)
class ImportResult:
    total: int
    imported: int
    duplicates: int
    double_punches_discarded: int
    new_workers: int
    manual_punches_preserved: int

    @property
    def skipped(self) -> int:
        return self.duplicates + self.double_punches_discarded


class PunchImportService:
    def __init__(
        self,
        session: Session,
        clock: Clock | None = None,
        settings: PayrollSettings | None = None,
    ):
        self.session = session
        self.clock = clock or SystemClock()
        self.settings = settings or get_settings()

    def _resolve_codes(self, codes: set[str]) -> tuple[dict[str, UUID], int]:
        stmt = select(WorkerModel).where(WorkerModel.code.in_(codes))
        code_to_id = {row.code: row.id for row in self.session.execute(stmt).scalars()}
        created = 0
        rates = PayRateService(self.session, self.clock, self.settings)
        for code in sorted(codes - code_to_id.keys()):
            worker, _ = rates.create_worker(code=code, name=f"Employee {code}")
            code_to_id[code] = worker.id
            created += 1
        return code_to_id, created

    def import_punches(self, raw_punches: Sequence[RawPunch]) -> ImportResult:
        """Store ``raw_punches``; flushes, never commits.

        Log lines emitted during the run carry an ``import_batch`` id.
        """
        if not raw_punches:
            return ImportResult(0, 0, 0, 0, 0, 0)
        with LogContext.bind(import_batch=str(uuid4())):
            return self._import(raw_punches)

    def _import(self, raw_punches: Sequence[RawPunch]) -> ImportResult:
        code_to_id, new_workers = self._resolve_codes({p.worker_code for p in raw_punches})
        filtered = filter_double_punches(
            raw_punches, min_gap_seconds=self.settings.double_punch_gap_seconds,
        )

        worker_ids = list(code_to_id.values())
        existing_stmt = select(PunchModel.worker_id, PunchModel.timestamp).where(
            PunchModel.worker_id.in_(worker_ids),
        )
        existing = {(wid, ts) for wid, ts in self.session.execute(existing_stmt)}

        imported = 0
        duplicates = 0
        for raw in filtered.kept:
            key = (code_to_id[raw.worker_code], raw.timestamp)
            if key in existing:
                duplicates += 1
                continue
            existing.add(key)
            self.session.add(
                PunchModel(
                    worker_id=key[0],
                    timestamp=raw.timestamp,
                    punch_type=PunchType.UNKNOWN.value,
                    is_manual=False,
                    source=PunchSource.IMPORT.value,
                    raw_line=raw.raw_line or None,
                )
            )
            imported += 1
        self.session.flush()

        manual_stmt = select(PunchModel.id).where(
            PunchModel.worker_id.in_(worker_ids),
            PunchModel.is_manual.is_(True),
        )
        manual = len(self.session.execute(manual_stmt).all())

        result = ImportResult(
            total=len(raw_punches),
            imported=imported,
            duplicates=duplicates,
            double_punches_discarded=filtered.discarded_count,
            new_workers=new_workers,
            manual_punches_preserved=manual,
        )
        logger.info(
            "punches_imported",
            extra={
                "total": result.total,
                "imported": result.imported,
                "duplicates": result.duplicates,
                "double_punches_discarded": result.double_punches_discarded,
                "new_workers": result.new_workers,
            },
        )
        return result
