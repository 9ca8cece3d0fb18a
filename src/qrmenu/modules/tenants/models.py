"""Tenant and subscription database models."""

from enum import StrEnum
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qrmenu.core.constants import (
    DEFAULT_MAX_STORES,
    DEFAULT_PLAN,
    MAX_NAME_LENGTH,
    MAX_SLUG_LENGTH,
)
from qrmenu.core.database.base import Base, TimestampMixin, UUIDMixin


if TYPE_CHECKING:
    from qrmenu.modules.stores.models import Store
    from qrmenu.modules.users.models import User


class TenantStatus(StrEnum):
    """Lifecycle state of a tenant account."""

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    DELETED = "DELETED"


class Tenant(Base, UUIDMixin, TimestampMixin):
    """A customer account owning stores and users.

    Tenants are never hard deleted; deletion sets ``status`` to DELETED.
    """

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(MAX_SLUG_LENGTH),
        unique=True,
        nullable=False,
        index=True,
    )
    status: Mapped[TenantStatus] = mapped_column(
        Enum(TenantStatus, name="tenant_status", native_enum=False, length=20),
        default=TenantStatus.ACTIVE,
        nullable=False,
    )

    subscription: Mapped["Subscription | None"] = relationship(
        "Subscription",
        back_populates="tenant",
        uselist=False,
        lazy="selectin",
        cascade="all, delete-orphan",
    )
    # Collections use lazy="raise"; query them through the repos instead
    stores: Mapped[list["Store"]] = relationship(
        "Store",
        back_populates="tenant",
        lazy="raise",
    )
    users: Mapped[list["User"]] = relationship(
        "User",
        back_populates="tenant",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Tenant(id={self.id}, slug={self.slug}, status={self.status})>"


class Subscription(Base, UUIDMixin, TimestampMixin):
    """Plan attached to a tenant, capping how many stores it may own."""

    __tablename__ = "subscriptions"

    tenant_id: Mapped[UUID] = mapped_column(
        ForeignKey("tenants.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    plan: Mapped[str] = mapped_column(String(50), default=DEFAULT_PLAN, nullable=False)
    max_stores: Mapped[int] = mapped_column(
        Integer,
        default=DEFAULT_MAX_STORES,
        nullable=False,
    )

    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="subscription")

    def __repr__(self) -> str:
        return f"<Subscription(tenant_id={self.tenant_id}, plan={self.plan})>"
