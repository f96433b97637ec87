"""Meal logging routes; every route is scoped to the authenticated user"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import (
    get_current_user_id,
    get_meal_service,
    get_statistics_service,
)
from domain.mappers import MealMapper
from domain.schemas.meal_schemas import (
    MealCreate,
    MealResponse,
    MealStatisticsResponse,
    MealUpdate,
)
from services import MealService, StatisticsService

router = APIRouter(prefix="/meals", tags=["Meals"])


@router.post("", response_model=MealResponse, status_code=status.HTTP_201_CREATED)
def create_meal(
    body: MealCreate,
    user_id: UUID = Depends(get_current_user_id),
    meals: MealService = Depends(get_meal_service),
):
    meal = meals.create_meal(
        user_id=user_id,
        name=body.name,
        description=body.description,
        date=body.date,
        is_on_diet=body.is_on_diet,
    )
    return MealMapper.to_response(meal)


@router.get("", response_model=List[MealResponse])
def list_meals(
    user_id: UUID = Depends(get_current_user_id),
    meals: MealService = Depends(get_meal_service),
):
    """All of the caller's meals, oldest first."""
    return [MealMapper.to_response(m) for m in meals.list_meals(user_id)]


# Declared before /{meal_id} so "metrics" is not parsed as an id
@router.get("/metrics", response_model=MealStatisticsResponse)
def meal_metrics(
    user_id: UUID = Depends(get_current_user_id),
    statistics: StatisticsService = Depends(get_statistics_service),
):
    """Totals and the best run of consecutive on-diet meals."""
    return MealStatisticsResponse(**statistics.get_statistics(user_id).to_dict())


@router.get("/{meal_id}", response_model=MealResponse)
def get_meal(
    meal_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    meals: MealService = Depends(get_meal_service),
):
    return MealMapper.to_response(meals.get_meal(meal_id, user_id))


@router.put("/{meal_id}", response_model=MealResponse)
def replace_meal(
    meal_id: UUID,
    body: MealCreate,
    user_id: UUID = Depends(get_current_user_id),
    meals: MealService = Depends(get_meal_service),
):
    """Overwrite every editable field of a meal."""
    meal = meals.edit_meal(meal_id, user_id, body.model_dump())
    return MealMapper.to_response(meal)


@router.patch("/{meal_id}", response_model=MealResponse)
def update_meal(
    meal_id: UUID,
    body: MealUpdate,
    user_id: UUID = Depends(get_current_user_id),
    meals: MealService = Depends(get_meal_service),
):
    """Change only the fields present in the body."""
    meal = meals.edit_meal(meal_id, user_id, body.model_dump(exclude_unset=True))
    return MealMapper.to_response(meal)


@router.delete("/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal(
    meal_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    meals: MealService = Depends(get_meal_service),
):
    meals.delete_meal(meal_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
