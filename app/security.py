"""
Credential hashing and identity tokens.

CredentialStore wraps bcrypt (salted, adaptive work factor) and TokenAuthority
wraps PyJWT (HMAC-signed compact tokens). Both are stateless apart from their
configuration and are safe to share across requests.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Mapping, Optional

import bcrypt
import jwt
from jwt import ExpiredSignatureError, InvalidTokenError

from app.config import Settings
from app.exceptions import ServiceValidationError, UnauthorizedError

logger = logging.getLogger("diettrack.security")

# bcrypt only reads the first 72 bytes of its input.
BCRYPT_MAX_PASSWORD_BYTES = 72


class CredentialStore:
    """Password hashing and verification backed by bcrypt."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        # Used to spend a full verification on logins for unknown emails.
        self._dummy_hash = bcrypt.hashpw(
            b"diettrack-dummy-password", bcrypt.gensalt(rounds=rounds)
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialStore":
        return cls(rounds=settings.bcrypt_rounds)

    def hash_password(self, password: str) -> str:
        """Return a salted bcrypt hash (60 ASCII characters) for ``password``."""
        raw = password.encode("utf-8")
        if len(raw) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ServiceValidationError(
                f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes"
            )
        return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Check ``password`` against a stored hash in constant time."""
        raw = password.encode("utf-8")
        if len(raw) > BCRYPT_MAX_PASSWORD_BYTES:
            # Still costs one bcrypt check, like the normal path
            self.burn_verification(password)
            return False
        try:
            return bcrypt.checkpw(raw, password_hash.encode("ascii"))
        except (ValueError, UnicodeEncodeError):
            logger.warning("password_hash_malformed")
            return False

    def burn_verification(self, password: str) -> None:
        """Run a verification whose result is discarded."""
        raw = password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]
        bcrypt.checkpw(raw, self._dummy_hash)


class TokenAuthority:
    """Issues and verifies signed JWT identity tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_minutes: Optional[int] = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenAuthority":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.jwt_expires_minutes,
        )

    def issue(self, subject: str, claims: Optional[Mapping[str, Any]] = None) -> str:
        """Return a signed token for ``subject`` carrying the extra ``claims``."""
        now = datetime.now(timezone.utc)
        payload: Dict[str, Any] = dict(claims or {})
        payload["sub"] = str(subject)
        payload["iat"] = now
        if self.expires_minutes:
            payload["exp"] = now + timedelta(minutes=self.expires_minutes)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Dict[str, Any]:
        """Decode ``token`` and return its claims.

        Raises:
            UnauthorizedError: signature mismatch, malformed token, missing
                subject, or expired token
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub"]},
            )
        except ExpiredSignatureError as exc:
            raise UnauthorizedError("Token has expired", code="TOKEN_EXPIRED") from exc
        except InvalidTokenError as exc:
            raise UnauthorizedError("Invalid token", code="INVALID_TOKEN") from exc
