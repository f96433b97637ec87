"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.meal_service import MealService
from services.statistics_service import (
    MealStatistics,
    StatisticsService,
    compute_meal_statistics,
)

__all__ = [
    "AuthService",
    "MealService",
    "StatisticsService",
    "MealStatistics",
    "compute_meal_statistics",
]
