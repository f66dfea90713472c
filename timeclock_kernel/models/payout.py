"""
Module: timeclock_kernel.models.payout
Responsibility: ORM persistence for payouts (advances, loans, payments and
    loan repayments).
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/values.py only.
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from timeclock_kernel.db.base import Base
from timeclock_kernel.domain.values import Payout, PayoutKind


class PayoutModel(Base):
    __tablename__ = "payouts"

    __table_args__ = (
        Index("idx_payout_worker_date", "worker_id", "paid_on"),
    )

    worker_id: Mapped[UUID] = mapped_column(ForeignKey("workers.id"), nullable=False)
    amount: Mapped[Decimal] = mapped_column(nullable=False)
    kind: Mapped[str] = mapped_column(String(20), nullable=False)
    paid_on: Mapped[date] = mapped_column(nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    method: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def to_domain(self) -> Payout:
        return Payout(
            id=self.id,
            worker_id=self.worker_id,
            amount=self.amount,
            kind=PayoutKind(self.kind),
            paid_on=self.paid_on,
            description=self.description,
            method=self.method,
        )
