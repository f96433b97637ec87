"""
Meal Repository - ownership-scoped data access for meals.

Every read and mutation is filtered on (meal_id, user_id) together. Edits and
deletes are a single conditional statement whose affected-row count decides
the outcome, so there is no window between an ownership check and the write.
A miss never says whether the meal is absent or belongs to someone else.
"""

from datetime import datetime
from typing import Any, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import (
    ForeignKeyError,
    NotFoundOrForbiddenError,
    ServiceValidationError,
)
from domain.models import Meal
from domain.schemas.meal_schemas import to_utc
from repositories.base import BaseRepository, is_foreign_key_violation

EDITABLE_FIELDS = frozenset({"name", "description", "date", "is_on_diet"})


class MealRepository(BaseRepository[Meal]):
    """Repository for meal data access"""

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def _owned(self, meal_id: UUID, user_id: UUID):
        return (Meal.meal_id == meal_id, Meal.user_id == user_id)

    def _chronological(self):
        # date first, then insertion time, then primary key as the final tie-break
        return (Meal.date.asc(), Meal.created_at.asc(), Meal.meal_id.asc())

    def create_meal(
        self,
        user_id: UUID,
        name: str,
        description: str,
        date: datetime,
        is_on_diet: bool,
    ) -> Meal:
        """
        Insert a meal linked to its owner.

        Raises:
            ForeignKeyError: the owner row no longer exists
        """
        meal = Meal(
            user_id=user_id,
            name=name,
            description=description,
            date=to_utc(date),
            is_on_diet=is_on_diet,
        )
        try:
            return self.create(meal)
        except IntegrityError as e:
            if is_foreign_key_violation(e):
                raise ForeignKeyError(details={"user_id": str(user_id)}) from e
            raise

    def get_by_id_for_owner(self, meal_id: UUID, user_id: UUID) -> Optional[Meal]:
        """Get a meal by ID if, and only if, it belongs to ``user_id``"""
        return self.db.execute(
            select(Meal)
            .where(*self._owned(meal_id, user_id))
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def list_by_owner(self, user_id: UUID) -> List[Meal]:
        """All meals of a user in chronological order"""
        return list(
            self.db.execute(
                select(Meal)
                .where(Meal.user_id == user_id)
                .order_by(*self._chronological())
            ).scalars()
        )

    def list_diet_flags(self, user_id: UUID) -> List[bool]:
        """The on-diet flag of each meal of a user, in chronological order"""
        return list(
            self.db.execute(
                select(Meal.is_on_diet)
                .where(Meal.user_id == user_id)
                .order_by(*self._chronological())
            ).scalars()
        )

    def edit_meal(
        self, meal_id: UUID, user_id: UUID, fields: Mapping[str, Any]
    ) -> Meal:
        """
        Update a meal with one conditional UPDATE and return the fresh row.

        Args:
            meal_id: Meal UUID
            user_id: Verified owner UUID
            fields: Subset of name, description, date, is_on_diet

        Raises:
            ServiceValidationError: unknown field names
            NotFoundOrForbiddenError: no row matched (id, owner), or the row
                vanished before it could be read back
        """
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ServiceValidationError(
                "Unknown meal fields", details={"fields": sorted(unknown)}
            )

        values = dict(fields)
        if "date" in values:
            values["date"] = to_utc(values["date"])
        if not values:
            # Still run the conditional statement so ownership is checked atomically
            values["updated_at"] = func.now()
        result = self.db.execute(
            update(Meal)
            .where(*self._owned(meal_id, user_id))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise NotFoundOrForbiddenError()
        self.db.commit()

        meal = self.get_by_id_for_owner(meal_id, user_id)
        if meal is None:
            raise NotFoundOrForbiddenError()
        return meal

    def delete_meal(self, meal_id: UUID, user_id: UUID) -> None:
        """
        Delete a meal with one conditional DELETE.

        Raises:
            NotFoundOrForbiddenError: no row matched (id, owner)
        """
        result = self.db.execute(
            delete(Meal)
            .where(*self._owned(meal_id, user_id))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise NotFoundOrForbiddenError()
        self.db.commit()
