"""Dining table database model."""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from qrmenu.core.constants import MAX_LABEL_LENGTH
from qrmenu.core.database.base import Base, StoreMixin, TimestampMixin, UUIDMixin


if TYPE_CHECKING:
    from qrmenu.modules.stores.models import Store


class DiningTable(Base, UUIDMixin, TimestampMixin, StoreMixin):
    """A numbered table, reached by customers through a ``T<number>`` QR link."""

    __tablename__ = "tables"
    __table_args__ = (
        UniqueConstraint("store_id", "number", name="uq_tables_store_number"),
    )

    number: Mapped[int] = mapped_column(Integer, nullable=False)
    label: Mapped[str | None] = mapped_column(String(MAX_LABEL_LENGTH), nullable=True)

    store: Mapped["Store"] = relationship("Store", back_populates="tables")

    def __repr__(self) -> str:
        return f"<DiningTable(id={self.id}, number={self.number})>"
