"""Product database model."""

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import (
    Boolean,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qrmenu.core.constants import (
    MAX_IMAGE_PATH_LENGTH,
    MAX_NAME_LENGTH,
    MAX_SLUG_LENGTH,
)
from qrmenu.core.database.base import Base, StoreMixin, TimestampMixin, UUIDMixin


if TYPE_CHECKING:
    from qrmenu.modules.categories.models import Category


class Product(Base, UUIDMixin, TimestampMixin, StoreMixin):
    """A menu item.

    ``is_available`` is toggled by staff and broadcast to customers as
    ``stock:update``.
    """

    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("store_id", "slug", name="uq_products_store_slug"),
    )

    category_id: Mapped[UUID] = mapped_column(
        ForeignKey("categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    slug: Mapped[str] = mapped_column(String(MAX_SLUG_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    image: Mapped[str | None] = mapped_column(
        String(MAX_IMAGE_PATH_LENGTH),
        nullable=True,
    )
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="products",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, slug={self.slug})>"
