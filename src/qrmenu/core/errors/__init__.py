"""Error handling module with envelope-formatted responses."""

from qrmenu.core.errors.exceptions import (
    AppException,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    UnauthorizedError,
    ValidationError,
)
from qrmenu.core.errors.handlers import (
    ErrorEnvelope,
    FieldError,
    error_response,
    register_exception_handlers,
)


__all__ = [
    # Exceptions
    "AppException",
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    # Handlers
    "ErrorEnvelope",
    "FieldError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "UnauthorizedError",
    "ValidationError",
    "error_response",
    "register_exception_handlers",
]
