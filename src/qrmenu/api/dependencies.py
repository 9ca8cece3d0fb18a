"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from qrmenu.core.database import get_db
from qrmenu.core.schemas import PageParams


# Type alias for database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]


def get_page_params(
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[
        int, Query(ge=1, le=MAX_PAGE_SIZE, description="Items per page")
    ] = DEFAULT_PAGE_SIZE,
) -> PageParams:
    """Collect pagination query parameters."""
    return PageParams(page=page, limit=limit)


Pages = Annotated[PageParams, Depends(get_page_params)]
