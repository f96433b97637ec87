"""
User Repository - Data access layer for user-related operations
"""

from typing import Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from repositories.base import BaseRepository, is_unique_violation
from domain.models import AppUser
from app.exceptions import ConflictError


class UserRepository(BaseRepository[AppUser]):
    """Repository for user data access"""

    def __init__(self, db: Session):
        super().__init__(db, AppUser)

    def get_by_id(self, user_id: UUID) -> Optional[AppUser]:
        """Get user by ID"""
        return self.db.get(AppUser, user_id)

    def get_by_email(self, email: str) -> Optional[AppUser]:
        """Get user by (normalized) email"""
        return self.db.execute(
            select(AppUser).where(AppUser.email == email)
        ).scalar_one_or_none()

    def create_user(self, name: str, email: str, password_hash: str) -> AppUser:
        """Create a new user.

        Relies on the unique index on email rather than a lookup first, so two
        concurrent registrations cannot both succeed.
        """
        user = AppUser(name=name, email=email, password_hash=password_hash)
        try:
            return self.create(user)
        except IntegrityError as e:
            if is_unique_violation(e):
                raise ConflictError(
                    "Email already registered", details={"email": email}
                ) from e
            raise
