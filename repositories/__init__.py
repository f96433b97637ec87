"""
Repositories package - Data access layer.
"""

from repositories.base import (
    BaseRepository,
    is_foreign_key_violation,
    is_unique_violation,
)
from repositories.user_repository import UserRepository
from repositories.meal_repository import MealRepository

__all__ = [
    "BaseRepository",
    "is_foreign_key_violation",
    "is_unique_violation",
    "UserRepository",
    "MealRepository",
]
