"""User database models."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qrmenu.core.constants import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH, SHA256_HEX_LENGTH
from qrmenu.core.database.base import Base, TimestampMixin, UUIDMixin
from qrmenu.core.permissions.policy import UserRole


if TYPE_CHECKING:
    from qrmenu.modules.tenants.models import Tenant


class User(Base, UUIDMixin, TimestampMixin):
    """An admin dashboard account.

    Each user keeps at most one live refresh token: logging in again
    replaces it.

    Attributes:
        tenant_id: Owning tenant, None only for an unscoped super admin
        email: Unique email address across the system
        password_hash: Bcrypt-hashed password
        name: Display name
        role: SUPER_ADMIN, OWNER or MANAGER
        refresh_token_hash: SHA-256 hash of the current refresh token
        refresh_token_expires_at: When that refresh token stops working
    """

    __tablename__ = "users"

    tenant_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", native_enum=False, length=20),
        default=UserRole.MANAGER,
        nullable=False,
    )
    refresh_token_hash: Mapped[str | None] = mapped_column(
        String(SHA256_HEX_LENGTH),
        nullable=True,
        index=True,
    )
    refresh_token_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    tenant: Mapped["Tenant | None"] = relationship(
        "Tenant",
        back_populates="users",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
