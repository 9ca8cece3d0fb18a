"""Role and tenant-scope authorization policy.

A single capability check answers: does principal P hold one of the
allowed roles, and does the resource belong to P's tenant? SUPER_ADMIN
holds every role and is not bound to a tenant.

The functions here are pure and know nothing about HTTP.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from qrmenu.core.errors import ForbiddenError


class UserRole(StrEnum):
    """Roles a user account can hold."""

    SUPER_ADMIN = "SUPER_ADMIN"
    OWNER = "OWNER"
    MANAGER = "MANAGER"


# Role sets used by the route guards
ADMIN_ROLES = (UserRole.SUPER_ADMIN,)
OWNER_ROLES = (UserRole.SUPER_ADMIN, UserRole.OWNER)
STAFF_ROLES = (UserRole.SUPER_ADMIN, UserRole.OWNER, UserRole.MANAGER)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""

    user_id: UUID
    tenant_id: UUID | None
    role: UserRole

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of an authorization check."""

    allowed: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.allowed


def check_access(
    principal: Principal,
    roles: Iterable[UserRole],
    resource_tenant_id: UUID | None = None,
) -> AccessDecision:
    """Decide whether a principal may act on a resource.

    Args:
        principal: The caller
        roles: Roles allowed to perform the action
        resource_tenant_id: Tenant owning the resource, None when the
            action is not tied to an existing resource

    Returns:
        AccessDecision with the reason for any denial
    """
    if principal.role not in set(roles):
        return AccessDecision(False, "role_not_allowed")

    if principal.is_super_admin or resource_tenant_id is None:
        return AccessDecision(True)

    if principal.tenant_id != resource_tenant_id:
        return AccessDecision(False, "tenant_mismatch")

    return AccessDecision(True)


def ensure_access(
    principal: Principal,
    roles: Iterable[UserRole],
    resource_tenant_id: UUID | None = None,
) -> None:
    """Raise ForbiddenError unless ``check_access`` allows the action.

    Raises:
        ForbiddenError: If the role or tenant scope does not match
    """
    roles = tuple(roles)
    decision = check_access(principal, roles, resource_tenant_id)
    if decision:
        return

    if decision.reason == "tenant_mismatch":
        raise ForbiddenError(
            "Resource belongs to another tenant",
            error_code="tenant_mismatch",
        )
    raise ForbiddenError(
        "Insufficient permissions",
        error_code="insufficient_role",
        details={"required_roles": [str(role) for role in roles]},
    )
