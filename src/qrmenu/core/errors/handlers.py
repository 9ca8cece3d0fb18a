"""Exception handlers rendering the response envelope.

Every failure is returned as::

    {"success": false, "error": "<message>", "code": "<error_code>", "details": {...}}
"""

from typing import TYPE_CHECKING, Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError

from qrmenu.config import settings
from qrmenu.core.errors.exceptions import AppException
from qrmenu.core.schemas import CamelModel


if TYPE_CHECKING:
    from starlette.types import ExceptionHandler


logger = structlog.get_logger()


class FieldError(BaseModel):
    """Represents a single field validation error."""

    field: str
    message: str
    type: str | None = None


class ErrorEnvelope(CamelModel):
    """Error response body.

    Attributes:
        success: Always False
        error: Human-readable message
        code: Machine-readable error code
        details: Extra context, such as field errors
        request_id: Request ID for correlating with logs
    """

    success: bool = False
    error: str
    code: str
    details: dict[str, Any] | None = None
    request_id: str | None = None


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state if available."""
    return getattr(request.state, "request_id", None)


def error_response(
    request: Request,
    status_code: int,
    message: str,
    code: str,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build an error envelope response."""
    content = ErrorEnvelope(
        error=message,
        code=code,
        details=details or None,
        request_id=_get_request_id(request),
    ).model_dump(exclude_none=True, by_alias=True)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application-specific exceptions."""
    logger.warning(
        "app_exception",
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        path=str(request.url.path),
        details=exc.details,
    )
    headers = None
    retry_after = exc.details.get("retry_after")
    if retry_after is not None:
        headers = {"Retry-After": str(retry_after)}

    return error_response(
        request,
        exc.status_code,
        exc.message,
        exc.error_code,
        exc.details,
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors as 400 with field-level detail."""
    errors: list[FieldError] = []

    for error in exc.errors():
        loc = error.get("loc", ())
        # Skip the "body"/"query"/"form" location prefix
        field_parts = [
            str(part) for part in loc if part not in ("body", "query", "path", "form")
        ]
        field = ".".join(field_parts) if field_parts else "unknown"

        errors.append(
            FieldError(
                field=field,
                message=error.get("msg", "Invalid value"),
                type=error.get("type"),
            )
        )

    logger.warning(
        "validation_error",
        path=str(request.url.path),
        error_count=len(errors),
    )

    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "Request validation failed",
        "validation_error",
        {"errors": [e.model_dump(exclude_none=True) for e in errors]},
    )


async def integrity_error_handler(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    """Map database constraint violations to 409 Conflict."""
    logger.warning(
        "integrity_error",
        path=str(request.url.path),
        error=str(exc.orig),
    )
    return error_response(
        request,
        status.HTTP_409_CONFLICT,
        "Request conflicts with existing data",
        "conflict",
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions.

    The error is always logged; its text only reaches the client in
    development.
    """
    logger.exception(
        "unhandled_exception",
        path=str(request.url.path),
        error_type=type(exc).__name__,
    )

    message = str(exc) if settings.is_development else "Internal server error"
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        message,
        "internal_error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Call this function during app initialization:

        app = FastAPI()
        register_exception_handlers(app)
    """
    app.add_exception_handler(
        AppException, cast("ExceptionHandler", app_exception_handler)
    )
    app.add_exception_handler(
        RequestValidationError, cast("ExceptionHandler", validation_exception_handler)
    )
    app.add_exception_handler(
        IntegrityError, cast("ExceptionHandler", integrity_error_handler)
    )
    app.add_exception_handler(Exception, generic_exception_handler)
