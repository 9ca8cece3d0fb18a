"""Rate limiting decorator for per-route configuration."""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

import structlog
from fastapi import Request

from qrmenu.config import settings
from qrmenu.core.errors import RateLimitError
from qrmenu.core.logging.middleware import get_client_ip
from qrmenu.core.rate_limit.backend import rate_limiter


P = ParamSpec("P")
T = TypeVar("T")

logger = structlog.get_logger()


def rate_limit(
    requests: int | Callable[[], int],
    window: int | Callable[[], int],
    key_func: Callable[[Request], str] | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """Decorator to apply a rate limit to a route.

    The decorated route must accept a ``request: Request`` parameter.
    Limits may be given as callables so they are read from settings on
    each request.

    Args:
        requests: Maximum requests allowed in window
        window: Time window in seconds
        key_func: Custom function to extract identifier from request

    Example:
        @router.post("/auth/login")
        @rate_limit(requests=20, window=900)
        async def login(request: Request, ...):
            ...
    """

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            if not settings.rate_limit_enabled:
                return await func(*args, **kwargs)

            request = kwargs.get("request")
            if not isinstance(request, Request):
                request = next((a for a in args if isinstance(a, Request)), None)
            if request is None:
                return await func(*args, **kwargs)

            limit = requests() if callable(requests) else requests
            window_seconds = window() if callable(window) else window
            identifier = (
                key_func(request) if key_func else _get_default_identifier(request)
            )

            result = await rate_limiter.is_allowed(
                identifier=identifier,
                limit=limit,
                window=window_seconds,
                endpoint=request.url.path,
            )
            if not result.allowed:
                logger.warning(
                    "rate_limit_exceeded",
                    identifier=identifier,
                    path=request.url.path,
                    limit=limit,
                )
                raise RateLimitError(
                    f"Too many requests. Limit: {limit} per {window_seconds} seconds.",
                    details={"retry_after": result.retry_after},
                )

            return await func(*args, **kwargs)

        return wrapper

    return decorator


def _get_default_identifier(request: Request) -> str:
    """Rate limit key: the authenticated user, else the client IP."""
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"
    return f"ip:{get_client_ip(request) or 'unknown'}"
