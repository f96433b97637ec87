"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, Optional, Type, TypeVar
from abc import ABC

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

ModelType = TypeVar("ModelType")

# SQLSTATE codes for integrity violations
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def _sqlstate(exc: IntegrityError) -> Optional[str]:
    orig = exc.orig
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def is_unique_violation(exc: IntegrityError) -> bool:
    """True when ``exc`` was caused by a UNIQUE constraint."""
    code = _sqlstate(exc)
    if code:
        return code == UNIQUE_VIOLATION
    return "UNIQUE constraint failed" in str(exc.orig)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """True when ``exc`` was caused by a FOREIGN KEY constraint."""
    code = _sqlstate(exc)
    if code:
        return code == FOREIGN_KEY_VIOLATION
    return "FOREIGN KEY constraint failed" in str(exc.orig)


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common persistence operations.
    All repositories should inherit from this class.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def create(self, entity: ModelType) -> ModelType:
        """Insert a new entity and return it with server defaults loaded.

        Integrity errors roll the session back and propagate so subclasses
        can translate them.
        """
        try:
            self.db.add(entity)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        self.db.refresh(entity)
        return entity
