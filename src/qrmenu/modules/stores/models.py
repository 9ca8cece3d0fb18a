"""Store database model."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qrmenu.core.constants import (
    MAX_IMAGE_PATH_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_SLUG_LENGTH,
)
from qrmenu.core.database.base import Base, TenantMixin, TimestampMixin, UUIDMixin


if TYPE_CHECKING:
    from qrmenu.modules.categories.models import Category
    from qrmenu.modules.tables.models import DiningTable
    from qrmenu.modules.tenants.models import Tenant


class Store(Base, UUIDMixin, TimestampMixin, TenantMixin):
    """A single restaurant location.

    Attributes:
        slug: Public identifier used in menu URLs, unique system-wide
        is_active: Inactive stores are hidden from the public menu and
            refuse new orders
        order_sequence: Last issued order number sequence for this store
    """

    __tablename__ = "stores"

    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    slug: Mapped[str] = mapped_column(
        String(MAX_SLUG_LENGTH),
        unique=True,
        nullable=False,
        index=True,
    )
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(MAX_PHONE_LENGTH), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    logo: Mapped[str | None] = mapped_column(
        String(MAX_IMAGE_PATH_LENGTH),
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    order_sequence: Mapped[int] = mapped_column(
        Integer,
        default=0,
        server_default="0",
        nullable=False,
    )

    tenant: Mapped["Tenant"] = relationship(
        "Tenant",
        back_populates="stores",
        lazy="selectin",
    )
    # Collections use lazy="raise"; load them with selectinload() when needed
    categories: Mapped[list["Category"]] = relationship(
        "Category",
        back_populates="store",
        order_by="Category.sort_order",
        lazy="raise",
        cascade="all, delete-orphan",
    )
    tables: Mapped[list["DiningTable"]] = relationship(
        "DiningTable",
        back_populates="store",
        order_by="DiningTable.number",
        lazy="raise",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Store(id={self.id}, slug={self.slug})>"
