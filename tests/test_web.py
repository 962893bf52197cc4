import pytest
from aiohttp import test_utils

from gamevault.api.router import QueryRouter
from gamevault.api.web import create_app
from gamevault.sources.igdb_catalog import IGDBCatalog

from conftest import FakeIGDBClient


def make_app(responder, trending_cache):
    client = FakeIGDBClient(responder)
    return create_app(router=QueryRouter(IGDBCatalog(client, trending_cache))), client


@pytest.mark.asyncio
async def test_query_endpoint_returns_normalized_games(trending_cache, sample_games):
    app, _ = make_app(lambda resource, body: sample_games, trending_cache)

    async with test_utils.TestClient(test_utils.TestServer(app)) as http:
        resp = await http.post("/api/igdb/query", json={"mode": "trending", "limit": 3})
        assert resp.status == 200
        assert resp.headers["Cache-Control"] == "s-maxage=21600, stale-while-revalidate=86400"
        games = await resp.json()

    assert [g["id"] for g in games] == [10, 20, 30]
    assert games[0]["cover"]["url"].startswith("https://")


@pytest.mark.asyncio
async def test_invalid_json_is_400(trending_cache):
    app, client = make_app(lambda resource, body: [], trending_cache)

    async with test_utils.TestClient(test_utils.TestServer(app)) as http:
        resp = await http.post("/api/igdb/query", data="{not json", headers={"Content-Type": "application/json"})
        assert resp.status == 400
        assert await resp.json() == {"error": "Invalid JSON body"}

    assert client.sent == []


@pytest.mark.asyncio
async def test_not_found_detail_is_null_404(trending_cache):
    app, _ = make_app(lambda resource, body: [], trending_cache)

    async with test_utils.TestClient(test_utils.TestServer(app)) as http:
        resp = await http.post("/api/igdb/query", json={"mode": "detail", "id": 123})
        assert resp.status == 404
        assert await resp.json() is None


@pytest.mark.asyncio
async def test_health_without_gateway(trending_cache):
    app, _ = make_app(lambda resource, body: [], trending_cache)

    async with test_utils.TestClient(test_utils.TestServer(app)) as http:
        resp = await http.get("/health")
        assert resp.status == 200
        assert (await resp.json())["status"] == "ok"
