"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    LoginResponse,
    PublicUser,
)
from domain.schemas.meal_schemas import (
    MealCreate,
    MealUpdate,
    MealResponse,
    MealStatisticsResponse,
)

__all__ = [
    # Auth schemas
    "RegisterRequest",
    "LoginRequest",
    "LoginResponse",
    "PublicUser",
    # Meal schemas
    "MealCreate",
    "MealUpdate",
    "MealResponse",
    "MealStatisticsResponse",
]
