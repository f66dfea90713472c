"""
Module: timeclock_kernel.models.punch
Responsibility: ORM persistence for clock events (punches).
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/values.py only.

Invariants enforced:
    - At most one punch per (worker, timestamp); re-importing the same
      attendance log is idempotent at the storage level.
    - ``punch_type`` is stored for display only.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from timeclock_kernel.db.base import Base
from timeclock_kernel.domain.values import ClockEvent, PunchSource, PunchType


class PunchModel(Base):
    __tablename__ = "punches"

    __table_args__ = (
        UniqueConstraint("worker_id", "timestamp", name="uq_punch_worker_timestamp"),
        Index("idx_punch_timestamp", "timestamp"),
    )

    worker_id: Mapped[UUID] = mapped_column(ForeignKey("workers.id"), nullable=False)
    timestamp: Mapped[datetime] = mapped_column(nullable=False)
    punch_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PunchType.UNKNOWN.value,
    )
    is_manual: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    source: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PunchSource.IMPORT.value,
    )
    raw_line: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def to_domain(self) -> ClockEvent:
        return ClockEvent(
            id=self.id,
            worker_id=self.worker_id,
            timestamp=self.timestamp,
            punch_type=PunchType(self.punch_type),
            is_manual=self.is_manual,
            source=PunchSource(self.source),
            raw_line=self.raw_line,
        )

    def __repr__(self) -> str:
        return f"<PunchModel {self.worker_id} @ {self.timestamp}>"
