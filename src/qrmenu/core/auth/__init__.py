"""Authentication module for JWT and password handling.

The auth routes and service live in ``qrmenu.core.auth.routes`` and
``qrmenu.core.auth.service``; they depend on the user and tenant modules
and are imported from there directly.
"""

from qrmenu.core.auth.backend import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    hash_token,
    verify_password,
)
from qrmenu.core.auth.dependencies import (
    CurrentPrincipal,
    CurrentUser,
    get_current_user,
    get_principal,
)
from qrmenu.core.auth.middleware import RequestIdMiddleware, TenantContextMiddleware
from qrmenu.core.auth.schemas import TokenData, TokenPair


__all__ = [
    # Dependencies
    "CurrentPrincipal",
    "CurrentUser",
    # Middleware
    "RequestIdMiddleware",
    "TenantContextMiddleware",
    # Schemas
    "TokenData",
    "TokenPair",
    # Token utilities
    "create_access_token",
    "create_refresh_token",
    "decode_token",
    "get_current_user",
    "get_principal",
    # Password utilities
    "hash_password",
    "hash_token",
    "verify_password",
]
