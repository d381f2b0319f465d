import pytest
from httpx import ASGITransport, AsyncClient

from appraisal.main import app


@pytest.mark.asyncio
async def test_health_endpoint() -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/api/health")
        head = await client.head("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert head.status_code == 200


@pytest.mark.asyncio
async def test_only_api_routes_are_served() -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        robots = await client.get("/robots.txt")
        favicon = await client.get("/favicon.ico")

    assert robots.status_code == 404
    assert favicon.status_code == 404


@pytest.mark.asyncio
async def test_openapi_lists_appraisal_routes() -> None:
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/openapi.json")

    schema = response.json()
    assert schema["info"]["title"] == "Property Appraisal API"
    for path in (
        "/api/properties",
        "/api/owners",
        "/api/neighborhoods",
        "/api/sales",
        "/api/assessments",
        "/api/improvements",
        "/api/reports/summary",
        "/api/sql",
    ):
        assert path in schema["paths"]
