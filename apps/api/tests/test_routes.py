from __future__ import annotations

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from appraisal.repositories import properties as properties_repo
from appraisal.repositories import reports as reports_repo


@pytest.mark.asyncio
async def test_upsert_returns_camel_case_property(client, store):
    response = await client.post(
        "/api/properties",
        json={
            "action": "upsert",
            "folio": "F1001",
            "address": "123 Main St",
            "zipCode": "33101",
            "landValue": "80000",
            "buildingValue": "220000",
            "ownerName": "Jane Doe",
            "assessmentYear": "2025",
        },
    )

    assert response.status_code == 200
    body = response.json()["property"]
    assert body["folio"] == "F1001"
    assert body["zipCode"] == "33101"
    assert Decimal(str(body["landValue"])) == Decimal("80000")
    assert body["ownerId"] == next(iter(store.owners))
    assert "land_value" not in body


@pytest.mark.asyncio
async def test_unknown_action_is_rejected(client, store):
    response = await client.post("/api/properties", json={"action": "explode", "folio": "F1"})

    assert response.status_code == 422
    assert store.properties == {}


@pytest.mark.asyncio
async def test_missing_folio_is_bad_request(client, store):
    response = await client.post("/api/properties", json={"action": "upsert", "address": "1 Elm"})

    assert response.status_code == 400
    assert response.json() == {"detail": "folio is required"}


@pytest.mark.asyncio
async def test_get_by_folio_returns_null_when_missing(client, store):
    response = await client.post("/api/properties", json={"action": "getByFolio", "folio": "NOPE"})

    assert response.status_code == 200
    assert response.json() == {"property": None}


@pytest.mark.asyncio
async def test_update_missing_property_is_not_found(client, store):
    response = await client.post(
        "/api/properties", json={"action": "updateAddress", "folio": "F404", "newAddress": "1 Elm"}
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_returns_deleted_property(client, store):
    store.seed_property("F1", address="1 Elm")

    response = await client.post("/api/properties", json={"action": "deleteByFolio", "folio": "F1"})

    assert response.status_code == 200
    assert response.json()["deleted"]["address"] == "1 Elm"


@pytest.mark.asyncio
async def test_count_above_building(client, store):
    store.seed_property("A", building_value=Decimal("500"))

    response = await client.post("/api/properties", json={"action": "countAboveBuilding", "threshold": 100})

    assert response.json() == {"count": 1}


@pytest.mark.asyncio
async def test_adjust_land_by_zip_response_shape(client, monkeypatch):
    monkeypatch.setattr(reports_repo, "adjust_land_by_zip", AsyncMock(return_value=2))

    response = await client.post(
        "/api/properties", json={"action": "adjustLandByZip", "zipCode": "33101", "percent": "5"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Land values adjusted successfully"
    assert body["zipCode"] == "33101"
    assert body["rowsAffected"] == 2


@pytest.mark.asyncio
async def test_database_failure_returns_generic_message(client, monkeypatch):
    monkeypatch.setattr(
        properties_repo,
        "list_recent",
        AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("password authentication failed"))),
    )

    response = await client.get("/api/properties")

    assert response.status_code == 500
    assert response.json() == {"detail": "Server error"}


@pytest.mark.asyncio
async def test_list_properties(client, store):
    store.seed_property("F1")
    store.seed_property("F2")

    response = await client.get("/api/properties", params={"limit": 1})

    assert response.status_code == 200
    assert len(response.json()["properties"]) == 1


@pytest.mark.asyncio
async def test_owner_create_and_search(client, store):
    created = await client.post("/api/owners", json={"action": "createOwner", "name": "Jane Doe"})
    assert created.status_code == 200
    assert created.json()["owner"]["name"] == "Jane Doe"

    found = await client.get("/api/owners", params={"name": "jane"})
    assert [o["name"] for o in found.json()["owners"]] == ["Jane Doe"]


@pytest.mark.asyncio
async def test_neighborhood_lookup_by_code(client, store):
    await store.create_neighborhood(None, code="1130", name="Downtown")

    found = await client.get("/api/neighborhoods", params={"code": "1130"})
    missing = await client.get("/api/neighborhoods", params={"code": "0000"})

    assert found.json()["neighborhood"]["name"] == "Downtown"
    assert missing.json() == {"neighborhood": None}


@pytest.mark.asyncio
async def test_sale_requires_fields(client, store):
    response = await client.post("/api/sales", json={"action": "recordSale", "propertyId": "1"})

    assert response.status_code == 400
    assert response.json() == {"detail": "propertyId, saleDate, price are required"}


@pytest.mark.asyncio
async def test_assessments_require_property_id(client, store):
    response = await client.get("/api/assessments")

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_sql_read_rejects_unknown_key(client):
    response = await client.get("/api/sql", params={"q": "drop_everything"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_sql_write_insert_owner(client, monkeypatch):
    monkeypatch.setattr(
        reports_repo, "fetch_rows", AsyncMock(return_value=[{"id": 5, "name": "Ada", "email": None}])
    )

    response = await client.post("/api/sql", json={"action": "insert_owner", "name": "Ada"})

    assert response.status_code == 200
    assert response.json() == {"row": {"id": 5, "name": "Ada", "email": None}}


@pytest.mark.asyncio
async def test_improvements_add_and_list_ordered_by_type(client, store):
    for kind, year in (("Roof", "2021"), ("Pool", "2019")):
        created = await client.post(
            "/api/improvements",
            json={"action": "addImprovement", "propertyId": "1", "type": kind, "yearBuilt": year, "value": "12000.456"},
        )
        assert created.status_code == 200
        assert created.json()["improvement"]["type"] == kind

    listed = await client.get("/api/improvements", params={"propertyId": 1})

    assert listed.status_code == 200
    rows = listed.json()["improvements"]
    assert [row["type"] for row in rows] == ["Pool", "Roof"]
    assert rows[0]["yearBuilt"] == 2019
    assert rows[0]["propertyId"] == 1
    assert Decimal(str(rows[0]["value"])) == Decimal("12000.46")


@pytest.mark.asyncio
async def test_improvement_requires_type(client, store):
    response = await client.post("/api/improvements", json={"action": "addImprovement", "propertyId": "1"})

    assert response.status_code == 400
    assert response.json() == {"detail": "propertyId and type are required"}
    assert store.improvements == []


@pytest.mark.asyncio
async def test_upsert_rejects_negative_land_value(client, store):
    response = await client.post("/api/properties", json={"action": "upsert", "folio": "N1", "landValue": "-5000"})

    assert response.status_code == 400
    assert response.json() == {"detail": "landValue must not be negative"}
    assert store.properties == {}
