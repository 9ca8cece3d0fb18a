"""Dining table repository for database operations."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy import select

from qrmenu.api.dependencies import DBSession
from qrmenu.modules.tables.models import DiningTable


class TableRepository:
    """Repository for DiningTable database operations."""

    def __init__(self, session: DBSession) -> None:
        self.session = session

    async def create(self, table: DiningTable) -> DiningTable:
        self.session.add(table)
        await self.session.flush()
        return table

    async def get_by_id(self, table_id: UUID) -> DiningTable | None:
        return await self.session.get(DiningTable, table_id)

    async def get_by_number(self, store_id: UUID, number: int) -> DiningTable | None:
        result = await self.session.execute(
            select(DiningTable).where(
                DiningTable.store_id == store_id, DiningTable.number == number
            )
        )
        return result.scalar_one_or_none()

    async def list_by_store(self, store_id: UUID) -> list[DiningTable]:
        result = await self.session.execute(
            select(DiningTable)
            .where(DiningTable.store_id == store_id)
            .order_by(DiningTable.number)
        )
        return list(result.scalars().all())

    async def update(self, table: DiningTable) -> DiningTable:
        await self.session.flush()
        return table

    async def delete(self, table: DiningTable) -> None:
        await self.session.delete(table)
        await self.session.flush()


# Type alias for dependency injection
TableRepo = Annotated[TableRepository, Depends(TableRepository)]
