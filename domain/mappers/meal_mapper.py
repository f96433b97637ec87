"""
Meal domain mappers.
"""

from domain.models import Meal
from domain.schemas.meal_schemas import MealResponse, to_utc


class MealMapper:
    """Mapper for meal transformations."""

    @staticmethod
    def to_response(meal: Meal) -> MealResponse:
        """Convert a Meal ORM model to MealResponse, with UTC-aware timestamps."""
        return MealResponse(
            id=meal.meal_id,
            name=meal.name,
            description=meal.description,
            date=to_utc(meal.date),
            is_on_diet=meal.is_on_diet,
            user_id=meal.user_id,
            created_at=to_utc(meal.created_at),
            updated_at=to_utc(meal.updated_at),
        )
