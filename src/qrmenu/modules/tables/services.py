"""Dining table service for business logic."""

from typing import Annotated
from uuid import UUID

import structlog
from fastapi import Depends

from qrmenu.config import settings
from qrmenu.core.errors import ConflictError, NotFoundError
from qrmenu.core.permissions import Principal
from qrmenu.modules.stores.models import Store
from qrmenu.modules.stores.repos import StoreRepo
from qrmenu.modules.stores.services import load_store_for
from qrmenu.modules.tables.models import DiningTable
from qrmenu.modules.tables.repos import TableRepo
from qrmenu.modules.tables.schemas import (
    TableCreate,
    TableRead,
    TableUpdate,
    TableWithQr,
)


logger = structlog.get_logger()


def build_qr_url(
    store_slug: str,
    table_number: int,
    base_url: str | None = None,
) -> str:
    """Public menu link encoded in a table's QR code.

    Examples:
        >>> build_qr_url("kafe-nusantara", 5, "https://menu.example.com")
        'https://menu.example.com/menu/kafe-nusantara/T5'
    """
    base = settings.public_menu_base_url if base_url is None else base_url
    return f"{base.rstrip('/')}/menu/{store_slug}/T{table_number}"


def with_qr(table: DiningTable, store: Store) -> TableWithQr:
    return TableWithQr(
        **TableRead.model_validate(table).model_dump(),
        qr_url=build_qr_url(store.slug, table.number),
    )


class TableService:
    """Service for a store's dining tables."""

    def __init__(self, repo: TableRepo, stores: StoreRepo) -> None:
        self.repo = repo
        self.stores = stores

    async def list_tables(
        self, store_id: UUID, principal: Principal
    ) -> list[TableWithQr]:
        store = await load_store_for(self.stores, principal, store_id)
        tables = await self.repo.list_by_store(store_id)
        return [with_qr(table, store) for table in tables]

    async def create_table(
        self,
        store_id: UUID,
        data: TableCreate,
        principal: Principal,
    ) -> TableWithQr:
        """Create a table.

        Raises:
            NotFoundError: If the store does not exist
            ConflictError: If the number is already used in the store
        """
        store = await load_store_for(self.stores, principal, store_id)
        await self._ensure_number_free(store_id, data.number)

        table = await self.repo.create(
            DiningTable(store_id=store_id, number=data.number, label=data.label)
        )
        logger.info("table_created", table_id=str(table.id), number=table.number)
        return with_qr(table, store)

    async def update_table(
        self,
        table_id: UUID,
        data: TableUpdate,
        principal: Principal,
    ) -> TableWithQr:
        table, store = await self._load(table_id, principal)

        if data.number is not None and data.number != table.number:
            await self._ensure_number_free(table.store_id, data.number)
            table.number = data.number
        if "label" in data.model_fields_set:
            table.label = data.label

        await self.repo.update(table)
        return with_qr(table, store)

    async def delete_table(self, table_id: UUID, principal: Principal) -> None:
        """Delete a table. Past orders keep their data but lose the table link."""
        table, _store = await self._load(table_id, principal)
        await self.repo.delete(table)
        logger.info("table_deleted", table_id=str(table_id))

    async def _load(
        self, table_id: UUID, principal: Principal
    ) -> tuple[DiningTable, Store]:
        table = await self.repo.get_by_id(table_id)
        if not table:
            raise NotFoundError(
                "Table not found", resource="table", resource_id=str(table_id)
            )
        store = await load_store_for(self.stores, principal, table.store_id)
        return table, store

    async def _ensure_number_free(self, store_id: UUID, number: int) -> None:
        if await self.repo.get_by_number(store_id, number):
            raise ConflictError(
                f"Table {number} already exists in this store",
                error_code="table_exists",
                details={"number": number},
            )


# Type alias for dependency injection
TableSvc = Annotated[TableService, Depends(TableService)]
