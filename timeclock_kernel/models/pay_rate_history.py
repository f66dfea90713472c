"""
Module: timeclock_kernel.models.pay_rate_history
Responsibility: ORM persistence for the append-only pay-rate history.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/values.py only.

Invariants enforced:
    - Rows are only ever inserted.  A rate edit appends a row effective from
      the date of the edit; a retroactive fix appends an explicitly backdated
      row.  Nothing in this package updates or deletes them.
    - Two rows may share ``effective_from``; ``created_at`` breaks the tie.
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column

from timeclock_kernel.db.base import Base
from timeclock_kernel.domain.values import RateHistoryRecord


class PayRateHistoryModel(Base):
    __tablename__ = "pay_rate_history"

    __table_args__ = (
        Index("idx_rate_history_lookup", "worker_id", "effective_from"),
    )

    worker_id: Mapped[UUID] = mapped_column(ForeignKey("workers.id"), nullable=False)
    rate: Mapped[Decimal] = mapped_column(nullable=False)
    effective_from: Mapped[date] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(nullable=False)

    @classmethod
    def from_domain(cls, record: RateHistoryRecord) -> "PayRateHistoryModel":
        return cls(
            id=record.id,
            worker_id=record.worker_id,
            rate=record.rate,
            effective_from=record.effective_from,
            created_at=record.created_at,
        )

    def to_domain(self) -> RateHistoryRecord:
        return RateHistoryRecord(
            id=self.id,
            worker_id=self.worker_id,
            rate=self.rate,
            effective_from=self.effective_from,
            created_at=self.created_at,
        )
