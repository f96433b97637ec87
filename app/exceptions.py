from typing import Any, Mapping, Optional


class AppError(Exception):
    """Base class for typed domain errors raised by services and repositories.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: machine-readable error code, defaults to the class ``default_code``
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Application error"
    default_code = "APPLICATION_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(AppError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "SERVICE_VALIDATION_ERROR"


class UnauthorizedError(AppError):
    """Raised when credentials are wrong or a token is invalid or expired."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class NotFoundError(AppError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class NotFoundOrForbiddenError(NotFoundError):
    """Raised when a resource is missing or belongs to another user.

    The two cases share one message and code so callers cannot probe for
    other users' records.
    """

    default_message = "Meal not found"


class ConflictError(AppError):
    """Raised when a resource conflict occurs (e.g., duplicate entry)."""

    http_status = 409
    default_message = "Conflict"
    default_code = "CONFLICT"


class ForeignKeyError(ConflictError):
    """Raised when a row references an owner that no longer exists."""

    default_message = "Owner not found for this meal"
    default_code = "OWNER_NOT_FOUND"
