"""Request ID and tenant context middleware."""

import uuid

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from qrmenu.core.auth.backend import decode_token


logger = structlog.get_logger()


class TenantContextMiddleware(BaseHTTPMiddleware):
    """Middleware that injects tenant context into requests.

    Decodes the bearer token (if present) and exposes tenant_id, user_id
    and role on ``request.state`` and in the structlog context. It never
    rejects a request; the route dependencies enforce authentication.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        auth_header = request.headers.get("Authorization")
        if auth_header and auth_header.startswith("Bearer "):
            token_data = decode_token(auth_header.split(" ", 1)[1])

            if token_data:
                request.state.tenant_id = token_data.tenant_id
                request.state.user_id = token_data.user_id
                request.state.role = token_data.role

                tenant_id = token_data.tenant_id
                structlog.contextvars.bind_contextvars(
                    tenant_id=str(tenant_id) if tenant_id else None,
                    user_id=str(token_data.user_id),
                    role=token_data.role,
                )

        return await call_next(request)


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware that adds a unique request ID to each request.

    The request ID is added to:
    - request.state.request_id
    - Response header X-Request-ID
    - Structlog context
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars(
                "request_id", "tenant_id", "user_id", "role"
            )

        response.headers["X-Request-ID"] = request_id
        return response
