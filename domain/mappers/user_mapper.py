"""
User domain mappers.
Handles transformation between ORM models and DTOs for user-related entities.
"""

from domain.models import AppUser
from domain.schemas.auth_schemas import PublicUser


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def to_public(user: AppUser) -> PublicUser:
        """
        Convert AppUser ORM model to the PublicUser DTO.

        The password hash never leaves this layer.
        """
        return PublicUser(id=user.user_id, name=user.name, email=user.email)
