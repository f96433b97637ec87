"""Registration, login and current-user routes"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from api.dependencies import get_auth_service, get_current_user_id
from domain.schemas.auth_schemas import (
    LoginRequest,
    LoginResponse,
    PublicUser,
    RegisterRequest,
)
from services import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/register", response_model=PublicUser, status_code=status.HTTP_201_CREATED
)
def register(body: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    """Create an account; 409 when the email is already registered."""
    return auth.register(body.name, body.email, body.password)


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Exchange email and password for a bearer token."""
    return auth.login(body.email, body.password)


@router.get("/me", response_model=PublicUser)
def me(
    user_id: UUID = Depends(get_current_user_id),
    auth: AuthService = Depends(get_auth_service),
):
    return auth.get_current_user(user_id)
