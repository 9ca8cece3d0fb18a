"""Role-based, tenant-scoped authorization."""

from qrmenu.core.permissions.policy import (
    ADMIN_ROLES,
    OWNER_ROLES,
    STAFF_ROLES,
    AccessDecision,
    Principal,
    UserRole,
    check_access,
    ensure_access,
)


__all__ = [
    "ADMIN_ROLES",
    "OWNER_ROLES",
    "STAFF_ROLES",
    "AccessDecision",
    "Principal",
    "UserRole",
    "check_access",
    "ensure_access",
]
