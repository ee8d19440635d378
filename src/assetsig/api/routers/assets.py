"""Asset API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, Response

from assetsig.api.dependencies import Inventory, Pagination
from assetsig.core.assembler import INT64_MAX, INT64_MIN
from assetsig.schemas.asset import AssetResponse
from assetsig.services.inventory import AssetFilter

TOTAL_COUNT_HEADER = "X-Total-Count"

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get("", response_model=list[AssetResponse])
async def list_assets(
    response: Response,
    inventory: Inventory,
    pagination: Pagination,
    asset_id: int | None = Query(
        None,
        alias="id",
        ge=INT64_MIN,
        le=INT64_MAX,
        description="Exact asset id",
    ),
    host: str | None = Query(None, description="Substring match on host"),
) -> list[AssetResponse]:
    """List signed assets with filtering and pagination.

    The total number of matching assets is returned in the
    ``X-Total-Count`` header.
    """
    result = await inventory.list_assets(
        AssetFilter(asset_id=asset_id, host=host),
        page=pagination.page,
        limit=pagination.limit,
    )

    response.headers[TOTAL_COUNT_HEADER] = str(result.total)
    return [AssetResponse.model_validate(asset) for asset in result.items]


@router.get("/{asset_id}", response_model=AssetResponse)
async def get_asset(
    asset_id: Annotated[int, Path(ge=INT64_MIN, le=INT64_MAX)],
    inventory: Inventory,
) -> AssetResponse:
    """Get a single signed asset by id."""
    asset = await inventory.get_asset(asset_id)
    return AssetResponse.model_validate(asset)
