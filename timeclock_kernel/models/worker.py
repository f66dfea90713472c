"""
Module: timeclock_kernel.models.worker
Responsibility: ORM persistence for workers: identity, current pay rate and
    weekly overtime policy.
Architecture position: Kernel > Models.  May import from db/base.py and
    domain/values.py only.

Invariants enforced:
    - ``code`` (the attendance-device identifier) is unique.
    - ``pay_rate`` is the current rate only; historical rates live in
      ``pay_rate_history`` and are never overwritten.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from timeclock_kernel.db.base import Base
from timeclock_kernel.domain.values import OvertimePolicy, Worker


class WorkerModel(Base):
    """
    Worker row.

    Guarantees:
        - to_domain() returns a frozen ``Worker`` with its ``OvertimePolicy``.
    """

    __tablename__ = "workers"

    __table_args__ = (
        Index("idx_worker_code", "code", unique=True),
        Index("idx_worker_active", "active"),
    )

    code: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    pay_rate: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))

    overtime_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    overtime_threshold: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("40"))
    overtime_multiplier: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("1.5"))

    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(nullable=False)

    def to_domain(self) -> Worker:
        return Worker(
            id=self.id,
            code=self.code,
            name=self.name,
            pay_rate=self.pay_rate,
            overtime=OvertimePolicy(
                enabled=self.overtime_enabled,
                threshold_hours=self.overtime_threshold,
                multiplier=self.overtime_multiplier,
            ),
            active=self.active,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:
        return f"<WorkerModel {self.code}: {self.name}>"
