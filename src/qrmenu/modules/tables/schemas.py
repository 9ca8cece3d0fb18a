"""Pydantic schemas for dining table operations."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from qrmenu.core.constants import MAX_LABEL_LENGTH
from qrmenu.core.schemas import CamelModel


class TableCreate(CamelModel):
    number: int = Field(..., gt=0)
    label: str | None = Field(None, max_length=MAX_LABEL_LENGTH)


class TableUpdate(CamelModel):
    number: int | None = Field(None, gt=0)
    label: str | None = Field(None, max_length=MAX_LABEL_LENGTH)


class TableRead(CamelModel):
    id: UUID
    store_id: UUID
    number: int
    label: str | None
    created_at: datetime


class TableWithQr(TableRead):
    """Table with the public menu URL to encode in its QR code."""

    qr_url: str
