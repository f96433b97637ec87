"""
Meal adherence statistics.

compute_meal_statistics is a pure function over on-diet flags that are already
in chronological order. It never looks at timestamps, so two meal sets with
the same sequence of flags always produce the same numbers.
"""

from dataclasses import dataclass, asdict
from typing import Iterable
from uuid import UUID

from repositories import MealRepository
from services.base_service import BaseService


@dataclass(frozen=True)
class MealStatistics:
    total_meals: int = 0
    total_on_diet: int = 0
    total_off_diet: int = 0
    best_on_diet_sequence: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def compute_meal_statistics(flags: Iterable[bool]) -> MealStatistics:
    """
    Count meals by flag and find the longest run of consecutive on-diet meals.

    Runs are consecutive in order, not in calendar time: days without meals
    between two on-diet meals do not break a run, an off-diet meal does.
    """
    total = on_diet = current = best = 0
    for is_on_diet in flags:
        total += 1
        if is_on_diet:
            on_diet += 1
            current += 1
            best = max(best, current)
        else:
            current = 0
    return MealStatistics(
        total_meals=total,
        total_on_diet=on_diet,
        total_off_diet=total - on_diet,
        best_on_diet_sequence=best,
    )


class StatisticsService(BaseService):
    """Adherence statistics for one user's meals"""

    def __init__(self, meals: MealRepository):
        super().__init__("diettrack.statistics")
        self.meals = meals

    def get_statistics(self, user_id: UUID) -> MealStatistics:
        stats = compute_meal_statistics(self.meals.list_diet_flags(user_id))
        self.log_info(
            "statistics_computed",
            user_id=user_id,
            total_meals=stats.total_meals,
            best_on_diet_sequence=stats.best_on_diet_sequence,
        )
        return stats
