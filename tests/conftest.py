"""Pytest configuration and fixtures for AssetSig tests."""

from collections.abc import AsyncGenerator, Callable, Coroutine
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from assetsig.api.main import create_app
from assetsig.common.config import Settings
from assetsig.common.database import Database
from assetsig.models import Asset, AssetIP, AssetPort

InsertAssets = Callable[[list[dict[str, Any]]], Coroutine[Any, Any, None]]


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        environment="development",
        debug=True,
        database={"url": f"sqlite+aiosqlite:///{tmp_path / 'assets-test.db'}"},
        logging={"format": "console", "level": "WARNING"},
    )


@pytest_asyncio.fixture
async def database(test_settings: Settings) -> AsyncGenerator[Database, None]:
    """Database handle with the schema created."""
    db = Database.from_settings(test_settings.database)
    await db.create_schema()
    yield db
    await db.close()


@pytest.fixture
def insert_assets(database: Database) -> InsertAssets:
    """Insert assets described as dicts with optional ``ips``/``ports`` lists."""

    async def _insert(rows: list[dict[str, Any]]) -> None:
        async with database.session() as session:
            for row in rows:
                session.add(Asset(
                    id=row.get("id"),
                    host=row["host"],
                    comment=row.get("comment", ""),
                    owner=row.get("owner", ""),
                    ips=[AssetIP(address=a) for a in row.get("ips", [])],
                    ports=[AssetPort(port=p) for p in row.get("ports", [])],
                ))
            await session.commit()

    return _insert


@pytest_asyncio.fixture
async def async_client(
    test_settings: Settings,
    database: Database,
) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client bound to an app using the test database."""
    app = create_app(test_settings, database=database)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def sample_asset_data() -> dict[str, Any]:
    """Sample asset data for testing."""
    return {
        "id": 1,
        "host": "host1",
        "comment": "note",
        "owner": "alice",
        "ips": ["10.0.0.1", "10.0.0.2"],
        "ports": [22, 443],
    }


@pytest.fixture
def many_assets() -> list[dict[str, Any]]:
    """Twenty-five assets with ids 1..25."""
    return [
        {
            "id": i,
            "host": f"server-{i:02d}.example.com",
            "comment": f"rack {i % 4}",
            "owner": "ops",
            "ips": [f"192.168.0.{i}"],
            "ports": [80],
        }
        for i in range(1, 26)
    ]
