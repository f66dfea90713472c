"""
Module: timeclock_kernel.db.base
Responsibility: Declarative base for the SQLAlchemy ORM models at the
    storage boundary.  Provides the UUID primary key convention and portable
    column types for identifiers and exact decimals.
Architecture position: Kernel > DB.  This is the lowest-level import target
    within the kernel's storage boundary.  ALL model files import from here.
    MUST NOT import from models/, selectors/, services/ or domain/.

Invariants enforced:
    - UUID primary keys stored as String(36).
    - Decimal columns round-trip exactly on every backend (stored as text),
      so rates and amounts never pass through float.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import Date, DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UUIDString(TypeDecorator):
    """
    UUID type stored as String(36) for cross-database portability.

    Guarantees:
        - process_bind_param: UUID -> str on INSERT/UPDATE.
        - process_result_value: str -> UUID on SELECT.
    """

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(value)
        return None

    def process_result_value(self, value, dialect):
        if value is not None:
            return PyUUID(value)
        return None


class DecimalString(TypeDecorator):
    """
    Exact Decimal stored as its canonical string.

    SQLite has no decimal type and would round-trip through float; storing
    the string keeps ``Decimal("12.345")`` exactly ``Decimal("12.345")``.
    """

    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(Decimal(value))
        return None

    def process_result_value(self, value, dialect):
        if value is not None:
            return Decimal(value)
        return None


class Base(DeclarativeBase):
    """
    Declarative base for all timeclock ORM models.

    Guarantees:
        - id is always a uuid4-generated UUID stored as String(36).
        - Decimal maps to DecimalString -- exact on every backend.
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: DecimalString(),
        datetime: DateTime(),
        date: Date(),
        PyUUID: UUIDString(),
    }

    id: Mapped[PyUUID] = mapped_column(
        UUIDString(),
        primary_key=True,
        default=uuid4,
    )
