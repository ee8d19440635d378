"""Integration tests for Asset API endpoints."""

import hashlib

import pytest
from httpx import ASGITransport, AsyncClient

from assetsig.api.main import create_app


def sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


@pytest.mark.integration
class TestAssetAPI:
    """Test cases for Asset API endpoints."""

    @pytest.mark.asyncio
    async def test_list_assets_empty(self, async_client: AsyncClient):
        """Test listing assets when database is empty."""
        response = await async_client.get("/assets")
        assert response.status_code == 200
        assert response.json() == []
        assert response.headers["X-Total-Count"] == "0"

    @pytest.mark.asyncio
    async def test_list_assets_signed(
        self,
        async_client: AsyncClient,
        insert_assets,
        sample_asset_data: dict,
    ):
        """Test every asset, IP and port carries its content signature."""
        await insert_assets([sample_asset_data])

        response = await async_client.get("/assets")
        assert response.status_code == 200

        data = response.json()
        assert data == [
            {
                "id": 1,
                "host": "host1",
                "comment": "note",
                "owner": "alice",
                "ips": [
                    {"address": "10.0.0.1", "signature": sha256_hex("10.0.0.1")},
                    {"address": "10.0.0.2", "signature": sha256_hex("10.0.0.2")},
                ],
                "ports": [
                    {"port": 22, "signature": sha256_hex("22")},
                    {"port": 443, "signature": sha256_hex("443")},
                ],
                "signature": sha256_hex("host1notealice"),
            }
        ]

    @pytest.mark.asyncio
    async def test_signatures_stable_across_requests(
        self,
        async_client: AsyncClient,
        insert_assets,
        sample_asset_data: dict,
    ):
        await insert_assets([sample_asset_data])

        first = (await async_client.get("/assets")).json()
        second = (await async_client.get("/assets")).json()
        assert first == second

    @pytest.mark.asyncio
    async def test_list_assets_pagination(
        self,
        async_client: AsyncClient,
        insert_assets,
        many_assets: list,
    ):
        """Test page 2 of 25 rows returns rows 11-20 and the full total."""
        await insert_assets(many_assets)

        response = await async_client.get("/assets", params={"page": 2, "limit": 10})
        assert response.status_code == 200

        data = response.json()
        assert [a["id"] for a in data] == list(range(11, 21))
        assert response.headers["X-Total-Count"] == "25"

        last = await async_client.get("/assets", params={"page": 3, "limit": 10})
        assert [a["id"] for a in last.json()] == list(range(21, 26))
        assert last.headers["X-Total-Count"] == "25"

        beyond = await async_client.get("/assets", params={"page": 9, "limit": 10})
        assert beyond.json() == []
        assert beyond.headers["X-Total-Count"] == "25"

    @pytest.mark.asyncio
    async def test_default_limit(
        self,
        async_client: AsyncClient,
        insert_assets,
        many_assets: list,
    ):
        await insert_assets(many_assets)

        response = await async_client.get("/assets")
        assert len(response.json()) == 10

    @pytest.mark.asyncio
    async def test_filter_by_host(self, async_client: AsyncClient, insert_assets):
        """Test host filter is a case-insensitive substring match."""
        await insert_assets([
            {"id": 1, "host": "web-01.prod"},
            {"id": 2, "host": "db-01.prod"},
            {"id": 3, "host": "WEB-02.stage"},
        ])

        response = await async_client.get("/assets", params={"host": "web"})
        assert [a["id"] for a in response.json()] == [1, 3]
        assert response.headers["X-Total-Count"] == "2"

    @pytest.mark.asyncio
    async def test_filter_by_host_escapes_wildcards(
        self,
        async_client: AsyncClient,
        insert_assets,
    ):
        await insert_assets([
            {"id": 1, "host": "100%-uptime"},
            {"id": 2, "host": "plain"},
        ])

        response = await async_client.get("/assets", params={"host": "%"})
        assert [a["id"] for a in response.json()] == [1]

    @pytest.mark.asyncio
    async def test_filter_by_id(
        self,
        async_client: AsyncClient,
        insert_assets,
        many_assets: list,
    ):
        await insert_assets(many_assets)

        response = await async_client.get("/assets", params={"id": 7})
        data = response.json()
        assert [a["id"] for a in data] == [7]
        assert response.headers["X-Total-Count"] == "1"

    @pytest.mark.asyncio
    async def test_filters_combine_with_and(
        self,
        async_client: AsyncClient,
        insert_assets,
    ):
        """Test an id match is dropped when the host filter does not match."""
        await insert_assets([
            {"id": 1, "host": "web-01"},
            {"id": 2, "host": "db-01"},
        ])

        response = await async_client.get("/assets", params={"id": 1, "host": "db"})
        assert response.status_code == 200
        assert response.json() == []
        assert response.headers["X-Total-Count"] == "0"

        response = await async_client.get("/assets", params={"id": 2, "host": "db"})
        assert [a["id"] for a in response.json()] == [2]
        assert response.headers["X-Total-Count"] == "1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path,params",
        [
            ("/assets", {"id": "99999999999999999999"}),
            ("/assets", {"id": "-99999999999999999999"}),
            ("/assets/99999999999999999999", {}),
        ],
    )
    async def test_id_outside_int64_rejected(
        self,
        async_client: AsyncClient,
        path: str,
        params: dict,
    ):
        response = await async_client.get(path, params=params)
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_page_offset_beyond_int64_is_empty(
        self,
        async_client: AsyncClient,
        insert_assets,
        many_assets: list,
    ):
        await insert_assets(many_assets)

        response = await async_client.get(
            "/assets",
            params={"page": 100_000_000_000_000_000, "limit": 1000},
        )
        assert response.status_code == 200
        assert response.json() == []
        assert response.headers["X-Total-Count"] == "25"

    @pytest.mark.asyncio
    async def test_asset_without_ips_or_ports(
        self,
        async_client: AsyncClient,
        insert_assets,
    ):
        """Test a bare asset is returned with the single empty token."""
        await insert_assets([{"id": 1, "host": "bare"}])

        data = (await async_client.get("/assets")).json()
        assert len(data) == 1
        assert data[0]["ips"] == [{"address": "", "signature": sha256_hex("")}]
        assert data[0]["ports"] == [{"port": 0, "signature": sha256_hex("0")}]

    @pytest.mark.asyncio
    async def test_asset_without_ips_or_ports_empty_lists(
        self,
        test_settings,
        database,
        insert_assets,
    ):
        """Test bare assets get empty lists when the empty token is dropped."""
        await insert_assets([{"id": 1, "host": "bare"}])
        settings = test_settings.model_copy(
            update={"inventory": test_settings.inventory.model_copy(
                update={"preserve_empty_token": False},
            )},
        )
        app = create_app(settings, database=database)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            data = (await client.get("/assets")).json()

        assert len(data) == 1
        assert data[0]["ips"] == []
        assert data[0]["ports"] == []

    @pytest.mark.asyncio
    async def test_get_asset(
        self,
        async_client: AsyncClient,
        insert_assets,
        sample_asset_data: dict,
    ):
        """Test getting an asset by ID."""
        await insert_assets([sample_asset_data])

        response = await async_client.get("/assets/1")
        assert response.status_code == 200

        data = response.json()
        assert data["id"] == 1
        assert data["signature"] == sha256_hex("host1notealice")
        assert [ip["address"] for ip in data["ips"]] == ["10.0.0.1", "10.0.0.2"]

    @pytest.mark.asyncio
    async def test_get_asset_not_found(self, async_client: AsyncClient):
        """Test getting non-existent asset returns 404."""
        response = await async_client.get("/assets/12345")
        assert response.status_code == 404
        assert response.json()["error"] == "ASSET_NOT_FOUND"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": "x"}, {"id": "abc"}])
    async def test_invalid_query_params(self, async_client: AsyncClient, params: dict):
        response = await async_client.get("/assets", params=params)
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_cors_exposes_total_count(self, async_client: AsyncClient):
        response = await async_client.get(
            "/assets",
            headers={"Origin": "http://localhost:3000"},
        )
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert "X-Total-Count" in response.headers["access-control-expose-headers"]

    @pytest.mark.asyncio
    async def test_route_prefix(self, test_settings, database, insert_assets, sample_asset_data):
        await insert_assets([sample_asset_data])
        settings = test_settings.model_copy(
            update={"api": test_settings.api.model_copy(update={"prefix": "/api/v1"})},
        )
        app = create_app(settings, database=database)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            assert (await client.get("/api/v1/assets")).status_code == 200
            assert (await client.get("/assets")).status_code == 404
