"""Route guards built on the authorization policy.

Example:
    @router.post("/stores")
    async def create_store(principal: OwnerPrincipal, ...):
        ...
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

import structlog
from fastapi import Depends

from qrmenu.core.auth.dependencies import get_principal
from qrmenu.core.permissions.policy import (
    ADMIN_ROLES,
    OWNER_ROLES,
    STAFF_ROLES,
    Principal,
    UserRole,
    ensure_access,
)


logger = structlog.get_logger()


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[Principal]]:
    """Create a dependency that admits only the given roles.

    Tenant scoping is checked later, once the target resource is loaded,
    with ``ensure_access``.

    Args:
        roles: Roles allowed through the guard

    Returns:
        Dependency yielding the current Principal
    """

    async def guard(
        principal: Annotated[Principal, Depends(get_principal)],
    ) -> Principal:
        ensure_access(principal, roles)
        if principal.is_super_admin:
            logger.debug("super_admin_access", user_id=str(principal.user_id))
        return principal

    return guard


AdminPrincipal = Annotated[Principal, Depends(require_roles(*ADMIN_ROLES))]
OwnerPrincipal = Annotated[Principal, Depends(require_roles(*OWNER_ROLES))]
StaffPrincipal = Annotated[Principal, Depends(require_roles(*STAFF_ROLES))]
