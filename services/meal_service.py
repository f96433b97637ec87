"""
Meal service: ownership-scoped meal operations for an authenticated user.
"""

from datetime import datetime
from typing import Any, List, Mapping
from uuid import UUID

from app.exceptions import NotFoundOrForbiddenError
from domain.models import Meal
from repositories import MealRepository
from services.base_service import BaseService


class MealService(BaseService):
    """Business logic for meal logging"""

    def __init__(self, meals: MealRepository):
        super().__init__("diettrack.meals")
        self.meals = meals

    def create_meal(
        self,
        user_id: UUID,
        name: str,
        description: str,
        date: datetime,
        is_on_diet: bool,
    ) -> Meal:
        meal = self.meals.create_meal(
            user_id=user_id,
            name=name,
            description=description,
            date=date,
            is_on_diet=is_on_diet,
        )
        self.log_info(
            "meal_created",
            meal_id=meal.meal_id,
            user_id=user_id,
            is_on_diet=is_on_diet,
        )
        return meal

    def list_meals(self, user_id: UUID) -> List[Meal]:
        return self.meals.list_by_owner(user_id)

    def get_meal(self, meal_id: UUID, user_id: UUID) -> Meal:
        """
        Raises:
            NotFoundOrForbiddenError: missing or owned by another user
        """
        meal = self.meals.get_by_id_for_owner(meal_id, user_id)
        if meal is None:
            self.log_warning("meal_not_found", meal_id=meal_id, user_id=user_id)
            raise NotFoundOrForbiddenError()
        return meal

    def edit_meal(
        self, meal_id: UUID, user_id: UUID, fields: Mapping[str, Any]
    ) -> Meal:
        try:
            meal = self.meals.edit_meal(meal_id, user_id, fields)
        except NotFoundOrForbiddenError:
            self.log_warning("meal_edit_rejected", meal_id=meal_id, user_id=user_id)
            raise
        self.log_info(
            "meal_edited", meal_id=meal_id, user_id=user_id, fields=sorted(fields)
        )
        return meal

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> None:
        try:
            self.meals.delete_meal(meal_id, user_id)
        except NotFoundOrForbiddenError:
            self.log_warning("meal_delete_rejected", meal_id=meal_id, user_id=user_id)
            raise
        self.log_info("meal_deleted", meal_id=meal_id, user_id=user_id)
