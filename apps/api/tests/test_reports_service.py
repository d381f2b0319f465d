from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from appraisal.core.errors import ValidationError
from appraisal.repositories import reports as reports_repo
from appraisal.schemas import reports as schemas
from appraisal.services import reports as reports_service


@pytest.fixture
def fetch_rows(monkeypatch) -> AsyncMock:
    mock = AsyncMock(return_value=[{"id": 1}])
    monkeypatch.setattr(reports_repo, "fetch_rows", mock)
    return mock


@pytest.mark.asyncio
async def test_summary_blank_filters_are_bound_as_empty_strings(session, monkeypatch):
    summary = AsyncMock(return_value=[])
    monkeypatch.setattr(reports_repo, "property_summary", summary)

    await reports_service.property_summary(folio="  ", owner=None, neighborhood="1130", limit=500, session=session)

    summary.assert_awaited_once_with(session, folio="", owner="", neighborhood="1130", limit=200)


@pytest.mark.asyncio
async def test_read_query_binds_folio(session, fetch_rows):
    rows = await reports_service.run_read_query(
        schemas.ReadQuery.PROPERTY_BY_FOLIO, folio="F1001'; DROP TABLE properties; --", year=None, session=session
    )

    assert rows == [{"id": 1}]
    statement, params = fetch_rows.await_args.args[1:]
    assert statement is reports_repo.READ_QUERIES["property_by_folio"]
    assert params == {"folio": "F1001'; DROP TABLE properties; --"}


@pytest.mark.asyncio
async def test_sales_in_year_defaults_year(session, fetch_rows):
    await reports_service.run_read_query(schemas.ReadQuery.SALES_IN_YEAR, folio=None, year=None, session=session)

    assert fetch_rows.await_args.args[2] == {"year": 2024}


@pytest.mark.asyncio
async def test_insert_owner_returns_single_row(session, fetch_rows):
    payload = schemas.InsertOwnerRequest(action="insert_owner", name=" Ada ", email="")

    result = await reports_service.run_write_query(payload, session)

    assert isinstance(result, schemas.RowResponse)
    assert result.row == {"id": 1}
    assert fetch_rows.await_args.args[2] == {"name": "Ada", "email": None}
    assert session.commits == 1


@pytest.mark.asyncio
async def test_delete_improvement_without_match_returns_null_row(session, fetch_rows):
    fetch_rows.return_value = []

    result = await reports_service.run_write_query(
        schemas.DeleteImprovementRequest(action="delete_improvement", id="12"), session
    )

    assert result.row is None
    assert fetch_rows.await_args.args[2] == {"id": 12}


@pytest.mark.asyncio
async def test_add_sale_parses_values(session, fetch_rows):
    await reports_service.run_write_query(
        schemas.AddSaleRequest(action="add_sale", propertyId="3", price="1000.50", saleDate="2024-05-01"), session
    )

    assert fetch_rows.await_args.args[2] == {
        "property_id": 3,
        "price": Decimal("1000.50"),
        "sale_date": date(2024, 5, 1),
        "buyer": None,
        "seller": None,
    }


@pytest.mark.asyncio
async def test_sales_in_range_returns_rows(session, fetch_rows):
    fetch_rows.return_value = [{"id": 1}, {"id": 2}]

    result = await reports_service.run_write_query(
        schemas.SalesInRangeRequest(action="sales_in_range", start="2024-01-01", end="2024-12-31"), session
    )

    assert isinstance(result, schemas.RowsResponse)
    assert len(result.rows) == 2


@pytest.mark.asyncio
async def test_owners_with_min_properties_defaults_to_one(session, fetch_rows):
    await reports_service.run_write_query(
        schemas.OwnersWithMinPropertiesRequest(action="owners_with_min_properties"), session
    )

    assert fetch_rows.await_args.args[2] == {"min_count": 1}


@pytest.mark.asyncio
async def test_write_query_validation_happens_before_transaction(session, fetch_rows):
    with pytest.raises(ValidationError):
        await reports_service.run_write_query(
            schemas.UpdatePropertyAddressRequest(action="update_property_address", newAddress="x"), session
        )

    assert session.begin_count == 0
    fetch_rows.assert_not_awaited()
