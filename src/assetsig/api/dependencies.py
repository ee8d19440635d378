"""FastAPI dependency injection for API endpoints."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from assetsig.common.config import Settings
from assetsig.common.database import Database
from assetsig.common.exceptions import ServiceUnavailableError
from assetsig.services.inventory import InventoryService


def get_app_settings(request: Request) -> Settings:
    """Settings the application was built with."""
    return request.app.state.settings


AppSettings = Annotated[Settings, Depends(get_app_settings)]


def get_database(request: Request) -> Database:
    """Data-access handle attached to the application at startup.

    Raises:
        ServiceUnavailableError: If the handle has not been set up yet.
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise ServiceUnavailableError("Database not initialized")
    return database


async def get_db(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for request.

    Yields:
        Database session for the request lifetime.
    """
    async with database.session() as session:
        yield session


# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_inventory_service(db: DbSession, settings: AppSettings) -> InventoryService:
    return InventoryService(
        db,
        preserve_empty_token=settings.inventory.preserve_empty_token,
    )


Inventory = Annotated[InventoryService, Depends(get_inventory_service)]


class PaginationParams:
    """Page-number pagination parameters."""

    def __init__(
        self,
        request: Request,
        page: Annotated[int, Query(ge=1, description="Page number (1-based)")] = 1,
        limit: Annotated[
            int | None,
            Query(ge=1, description="Items per page"),
        ] = None,
    ) -> None:
        api_settings = request.app.state.settings.api
        self.page = page
        self.limit = min(limit or api_settings.default_limit, api_settings.max_limit)


Pagination = Annotated[PaginationParams, Depends()]
