"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and credential/token primitives.
"""

from app.config import settings, Settings
from app.exceptions import (
    AppError,
    ServiceValidationError,
    NotFoundError,
    NotFoundOrForbiddenError,
    ConflictError,
    ForeignKeyError,
    UnauthorizedError,
)

__all__ = [
    "settings",
    "Settings",
    "AppError",
    "ServiceValidationError",
    "NotFoundError",
    "NotFoundOrForbiddenError",
    "ConflictError",
    "ForeignKeyError",
    "UnauthorizedError",
]
