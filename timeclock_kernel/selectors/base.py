"""
Module: timeclock_kernel.selectors.base
Responsibility: Abstract base class for read-only query selectors.
Architecture position: Kernel > Selectors.  May import from db/, models/ and
    domain/.  MUST NOT import from services/ or outer layers.

Invariants enforced:
    - Read-only access: selectors never add, delete, flush or commit.
    - DTO return convention: selectors return frozen domain objects, not
      ORM instances.
    - Session ownership: the caller owns the session and its transaction,
      so one session gives one consistent snapshot.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from timeclock_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseSelector(ABC, Generic[ModelType]):
    """
    Abstract base class for all selectors.

    Contract:
        Selectors accept a Session from the caller, perform read-only queries,
        and return domain objects.  They MUST NOT mutate any data.
    """

    def __init__(self, session: Session):
        self.session = session
