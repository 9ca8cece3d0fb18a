"""Authentication schemas for token handling."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class TokenData(BaseModel):
    """Data extracted from a JWT access token.

    Attributes:
        user_id: The user's UUID
        tenant_id: The tenant's UUID, None for an unscoped account
        role: The user's role name
        exp: Token expiration time
        type: Token type
        jti: Unique token identifier
    """

    user_id: UUID
    tenant_id: UUID | None = None
    role: str
    exp: datetime
    type: str = "access"
    jti: str | None = None


class TokenPair(BaseModel):
    """A pair of access and refresh tokens.

    Attributes:
        access_token: Short-lived JWT for API access
        refresh_token: Long-lived opaque token for getting new access tokens
        token_type: Always "bearer"
        expires_in: Access token expiration in seconds
    """

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
