"""
Authentication service: registration, login and identity resolution.
"""

from uuid import UUID

from app.exceptions import ConflictError, NotFoundError, UnauthorizedError
from app.security import CredentialStore, TokenAuthority
from domain.mappers import UserMapper
from domain.schemas.auth_schemas import LoginResponse, PublicUser
from repositories import UserRepository
from services.base_service import BaseService

INVALID_CREDENTIALS = "Invalid credentials"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService(BaseService):
    """Business logic for user accounts and identity tokens"""

    def __init__(
        self,
        users: UserRepository,
        credentials: CredentialStore,
        tokens: TokenAuthority,
    ):
        super().__init__("diettrack.auth")
        self.users = users
        self.credentials = credentials
        self.tokens = tokens

    def register(self, name: str, email: str, password: str) -> PublicUser:
        """
        Create a user account.

        Raises:
            ConflictError: the email is already registered
        """
        email = normalize_email(email)
        password_hash = self.credentials.hash_password(password)
        try:
            user = self.users.create_user(
                name=name, email=email, password_hash=password_hash
            )
        except ConflictError:
            self.log_warning("user_register_conflict", email=email)
            raise
        self.log_info("user_registered", user_id=user.user_id)
        return UserMapper.to_public(user)

    def login(self, email: str, password: str) -> LoginResponse:
        """
        Check credentials and issue a token whose subject is the user id.

        Unknown email and wrong password raise the same UnauthorizedError and
        cost the same bcrypt work, so neither reveals which accounts exist.
        """
        user = self.users.get_by_email(normalize_email(email))
        if user is None:
            self.credentials.burn_verification(password)
            ok = False
        else:
            ok = self.credentials.verify_password(password, user.password_hash)

        if not ok:
            self.log_warning("login_rejected")
            raise UnauthorizedError(INVALID_CREDENTIALS, code="INVALID_CREDENTIALS")

        token = self.tokens.issue(str(user.user_id), {"email": user.email})
        self.log_info("login_succeeded", user_id=user.user_id)
        return LoginResponse(token=token, user=UserMapper.to_public(user))

    def resolve_identity(self, token: str) -> UUID:
        """Verify ``token`` and return its subject as a user id."""
        claims = self.tokens.verify(token)
        try:
            return UUID(str(claims["sub"]))
        except (KeyError, ValueError) as exc:
            raise UnauthorizedError("Invalid token", code="INVALID_TOKEN") from exc

    def get_current_user(self, user_id: UUID) -> PublicUser:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return UserMapper.to_public(user)
