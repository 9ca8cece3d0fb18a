"""Category database model."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qrmenu.core.constants import MAX_NAME_LENGTH, MAX_SLUG_LENGTH
from qrmenu.core.database.base import Base, StoreMixin, TimestampMixin, UUIDMixin


if TYPE_CHECKING:
    from qrmenu.modules.products.models import Product
    from qrmenu.modules.stores.models import Store


class Category(Base, UUIDMixin, TimestampMixin, StoreMixin):
    """A menu section within a store, shown in ``sort_order``."""

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("store_id", "slug", name="uq_categories_store_slug"),
    )

    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    slug: Mapped[str] = mapped_column(String(MAX_SLUG_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    store: Mapped["Store"] = relationship("Store", back_populates="categories")
    # lazy="raise"; deletes rely on ON DELETE CASCADE via passive_deletes
    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="category",
        order_by="[Product.sort_order, Product.name]",
        lazy="raise",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, slug={self.slug})>"
