"""Inventory query service.

Reads flat asset rows (IPs and ports aggregated into comma-joined strings
by the store), assembles them into entities and signs every one before
handing back a page together with the unpaginated total.
"""

from dataclasses import dataclass, field

from sqlalchemy import ColumnElement, Select, String, cast, func, literal_column, select
from sqlalchemy.dialects.postgresql import aggregate_order_by
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from assetsig.common.exceptions import AssetNotFoundError, DatabaseError, InvalidQueryError
from assetsig.common.logging import get_logger
from assetsig.common.metrics import ASSETS_SIGNED, DB_QUERY_DURATION, PORT_PARSE_FALLBACKS
from assetsig.core.assembler import (
    INT64_MAX,
    INT64_MIN,
    AssetRow,
    assemble_asset,
    is_port_token,
    split_tokens,
)
from assetsig.core.entities import Asset
from assetsig.core.signature import sign_asset
from assetsig.models.asset import Asset as AssetModel
from assetsig.models.asset import AssetIP, AssetPort

logger = get_logger(__name__)


def page_offset(page: int, limit: int) -> int:
    """Translate a 1-based page number and page size into a row offset."""
    if page < 1 or limit < 1:
        raise InvalidQueryError(
            "page and limit must be positive",
            details={"page": page, "limit": limit},
        )
    return (page - 1) * limit


@dataclass(frozen=True)
class AssetFilter:
    """Optional predicates shared by the page query and the count query."""

    asset_id: int | None = None
    host: str | None = None

    def clauses(self) -> list[ColumnElement[bool]]:
        conditions = []
        if self.asset_id is not None:
            conditions.append(AssetModel.id == self.asset_id)
        if self.host:
            conditions.append(AssetModel.host.icontains(self.host, autoescape=True))
        return conditions


@dataclass
class AssetPage:
    """One page of signed assets plus the total matching the filter."""

    items: list[Asset] = field(default_factory=list)
    total: int = 0


def _aggregate(column, order_by, dialect: str):
    """Comma-join a child column, in child row order where the dialect allows it."""
    if dialect == "postgresql":
        return func.string_agg(
            cast(column, String),
            aggregate_order_by(literal_column("','"), order_by),
        )
    return func.group_concat(column, ",")


def build_rows_query(dialect: str) -> Select:
    """Select one flat row per asset with IPs and ports comma-joined."""
    ip_csv = (
        select(_aggregate(AssetIP.address, AssetIP.id, dialect))
        .where(AssetIP.asset_id == AssetModel.id)
        .scalar_subquery()
    )
    port_csv = (
        select(_aggregate(AssetPort.port, AssetPort.id, dialect))
        .where(AssetPort.asset_id == AssetModel.id)
        .scalar_subquery()
    )
    return select(
        AssetModel.id,
        AssetModel.host,
        AssetModel.comment,
        AssetModel.owner,
        ip_csv.label("ip_csv"),
        port_csv.label("port_csv"),
    )


class InventoryService:
    """Read-only access to signed inventory assets."""

    def __init__(self, db: AsyncSession, preserve_empty_token: bool = True):
        self.db = db
        self.preserve_empty_token = preserve_empty_token

    @property
    def dialect(self) -> str:
        return self.db.get_bind().dialect.name

    async def count_assets(self, filters: AssetFilter) -> int:
        """Count assets matching the filter, ignoring pagination."""
        query = select(func.count()).select_from(AssetModel).where(*filters.clauses())
        try:
            with DB_QUERY_DURATION.labels(operation="count_assets").time():
                total = await self.db.scalar(query)
        except SQLAlchemyError as e:
            raise DatabaseError("Error in count query", cause=e) from e
        return total or 0

    async def fetch_rows(
        self,
        filters: AssetFilter,
        offset: int,
        limit: int,
    ) -> list[AssetRow]:
        """Fetch one page of flat rows ordered by asset id.

        All rows are read before any is assembled, so a failing read never
        yields a partial page.
        """
        query = (
            build_rows_query(self.dialect)
            .where(*filters.clauses())
            .order_by(AssetModel.id)
            .offset(offset)
            .limit(limit)
        )
        try:
            with DB_QUERY_DURATION.labels(operation="fetch_rows").time():
                result = await self.db.execute(query)
                rows = result.all()
        except SQLAlchemyError as e:
            raise DatabaseError("Error in asset query", cause=e) from e
        return [AssetRow(*row) for row in rows]

    def build_assets(self, rows: list[AssetRow]) -> list[Asset]:
        """Assemble and sign every row."""
        fallbacks = 0
        assets = []
        for row in rows:
            fallbacks += sum(
                not is_port_token(token)
                for token in split_tokens(row.port_csv, self.preserve_empty_token)
            )
            assets.append(sign_asset(assemble_asset(row, self.preserve_empty_token)))

        ASSETS_SIGNED.inc(len(assets))
        if fallbacks:
            PORT_PARSE_FALLBACKS.inc(fallbacks)
            logger.debug("Port tokens defaulted to 0", count=fallbacks)
        return assets

    async def list_assets(
        self,
        filters: AssetFilter,
        page: int,
        limit: int,
    ) -> AssetPage:
        """Get one page of signed assets and the total for the filter.

        Args:
            filters: Optional id and host predicates.
            page: 1-based page number.
            limit: Page size.

        Returns:
            Signed assets in id order and the unpaginated total. A page whose
            offset does not fit in a 64-bit integer is empty.
        """
        offset = page_offset(page, limit)
        total = await self.count_assets(filters)
        rows = [] if offset > INT64_MAX else await self.fetch_rows(filters, offset, limit)
        items = self.build_assets(rows)

        logger.debug(
            "Fetched asset page",
            page=page,
            limit=limit,
            offset=offset,
            returned=len(items),
            total=total,
        )
        return AssetPage(items=items, total=total)

    async def get_asset(self, asset_id: int) -> Asset:
        """Get a single signed asset.

        Raises:
            AssetNotFoundError: If no asset has this id.
        """
        rows = []
        if INT64_MIN <= asset_id <= INT64_MAX:
            rows = await self.fetch_rows(AssetFilter(asset_id=asset_id), offset=0, limit=1)
        if not rows:
            raise AssetNotFoundError(details={"id": asset_id})
        return self.build_assets(rows)[0]
