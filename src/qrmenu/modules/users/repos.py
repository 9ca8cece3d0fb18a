"""User repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import Select, func, select
from sqlalchemy.orm import selectinload

from qrmenu.api.dependencies import DBSession
from qrmenu.modules.users.models import User


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user.

        Args:
            user: User instance to create

        Returns:
            The created user with ID populated
        """
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get a user by ID with their tenant loaded."""
        return await self._one(select(User).where(User.id == user_id))

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email address (emails are unique system-wide)."""
        return await self._one(select(User).where(User.email == email))

    async def get_by_refresh_hash(self, token_hash: str) -> User | None:
        """Find the user whose current refresh token has this hash."""
        return await self._one(
            select(User).where(User.refresh_token_hash == token_hash)
        )

    async def list_by_tenant(self, tenant_id: UUID) -> list[User]:
        """List a tenant's users by name."""
        result = await self.session.execute(
            select(User).where(User.tenant_id == tenant_id).order_by(User.name)
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        """Count all users in the system."""
        result = await self.session.execute(select(func.count()).select_from(User))
        return result.scalar_one()

    async def count_by_tenant(self, tenant_ids: list[UUID]) -> dict[UUID, int]:
        """Count users per tenant."""
        if not tenant_ids:
            return {}
        result = await self.session.execute(
            select(User.tenant_id, func.count(User.id))
            .where(User.tenant_id.in_(tenant_ids))
            .group_by(User.tenant_id)
        )
        return {tenant_id: count for tenant_id, count in result.all()}

    async def update(self, user: User) -> User:
        """Flush pending changes to a user."""
        await self.session.flush()
        return user

    async def _one(self, stmt: Select[tuple[User]]) -> User | None:
        # populate_existing re-runs eager loaders on identity-map hits
        result = await self.session.execute(
            stmt.options(selectinload(User.tenant)).execution_options(
                populate_existing=True
            )
        )
        return result.scalar_one_or_none()


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
