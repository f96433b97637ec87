"""
API dependencies for dependency injection.

The session factory, credential store and token authority are created once by
the application factory and read from ``app.state``; everything else is built
per request around a fresh database session.
"""

from typing import Generator, Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.exceptions import UnauthorizedError
from domain.models import session_scope
from repositories import MealRepository, UserRepository
from services import AuthService, MealService, StatisticsService

bearer_scheme = HTTPBearer(auto_error=False)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from session_scope(request.app.state.session_factory)


def get_auth_service(request: Request, db: Session = Depends(get_db)) -> AuthService:
    return AuthService(
        users=UserRepository(db),
        credentials=request.app.state.credentials,
        tokens=request.app.state.tokens,
    )


def get_meal_service(db: Session = Depends(get_db)) -> MealService:
    return MealService(MealRepository(db))


def get_statistics_service(db: Session = Depends(get_db)) -> StatisticsService:
    return StatisticsService(MealRepository(db))


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> UUID:
    """Resolve the bearer token into the caller's user id."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authenticated", code="NOT_AUTHENTICATED")
    return auth.resolve_identity(credentials.credentials)
