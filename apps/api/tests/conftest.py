"""Shared fixtures: a transaction-aware session stub and an in-memory repository layer."""
from __future__ import annotations

import itertools
from collections.abc import AsyncIterator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from appraisal.db.session import get_session
from appraisal.main import app
from appraisal.models.assessment import Assessment
from appraisal.models.base import utcnow
from appraisal.models.improvement import Improvement
from appraisal.models.neighborhood import Neighborhood
from appraisal.models.owner import Owner
from appraisal.models.property import Property
from appraisal.models.sale import Sale
from appraisal.repositories import assessments as assessments_repo
from appraisal.repositories import improvements as improvements_repo
from appraisal.repositories import neighborhoods as neighborhoods_repo
from appraisal.repositories import owners as owners_repo
from appraisal.repositories import properties as properties_repo
from appraisal.repositories import sales as sales_repo


class DummySession:
    """Minimal session stub supporting async transaction context."""

    def __init__(self) -> None:
        self.added: list[object] = []
        self.begin_count = 0
        self.commits = 0
        self.rollbacks = 0

    def add(self, obj: object) -> None:
        self.added.append(obj)

    def begin(self):  # noqa: D401 - mimic SQLAlchemy's async begin
        session = self

        class _Tx:
            async def __aenter__(self_inner):
                session.begin_count += 1
                return session

            async def __aexit__(self_inner, exc_type, exc, tb):
                if exc_type is None:
                    session.commits += 1
                else:
                    session.rollbacks += 1
                return False

        return _Tx()


class FakeStore:
    """Dictionary-backed stand-in for the repository modules."""

    def __init__(self) -> None:
        self.properties: dict[int, Property] = {}
        self.owners: dict[int, Owner] = {}
        self.neighborhoods: dict[int, Neighborhood] = {}
        self.sales: list[Sale] = []
        self.assessments: dict[tuple[int, int], Assessment] = {}
        self.improvements: list[Improvement] = []
        self._ids = {name: itertools.count(1) for name in ("property", "owner", "neighborhood", "sale", "improvement")}

    # properties
    async def get_property_by_folio(self, session, folio):
        return next((p for p in self.properties.values() if p.folio == folio), None)

    async def get_property_by_id(self, session, property_id):
        return self.properties.get(property_id)

    async def create_property(self, session, *, folio, **fields):
        if any(p.folio == folio for p in self.properties.values()):
            raise AssertionError(f"duplicate folio {folio}")
        now = utcnow()
        property = Property(id=next(self._ids["property"]), folio=folio, created_at=now, updated_at=now)
        for key in ("address", "zip_code", "land_value", "building_value", "owner_id", "neighborhood_id"):
            setattr(property, key, fields.get(key))
        self.properties[property.id] = property
        return property

    async def delete_property(self, session, property):
        self.properties.pop(property.id, None)

    async def list_recent_properties(self, session, *, limit):
        ordered = sorted(self.properties.values(), key=lambda p: p.updated_at, reverse=True)
        return ordered[:limit]

    async def list_by_land_value(self, session, *, min_value, max_value, limit):
        rows = [
            p
            for p in self.properties.values()
            if p.land_value is not None
            and (min_value is None or p.land_value >= min_value)
            and (max_value is None or p.land_value <= max_value)
        ]
        return sorted(rows, key=lambda p: p.land_value)[:limit]

    async def count_above_building(self, session, threshold):
        if threshold is None:
            return len(self.properties)
        return sum(1 for p in self.properties.values() if p.building_value is not None and p.building_value > threshold)

    async def list_by_neighborhood(self, session, neighborhood_id, *, limit):
        return [p for p in self.properties.values() if p.neighborhood_id == neighborhood_id][:limit]

    # owners
    async def get_owner(self, session, owner_id):
        return self.owners.get(owner_id)

    async def create_owner(self, session, *, name, phone=None, email=None):
        owner = Owner(id=next(self._ids["owner"]), name=name, phone=phone, email=email)
        self.owners[owner.id] = owner
        return owner

    async def search_owners(self, session, *, name, limit):
        rows = [o for o in self.owners.values() if not name or name.lower() in o.name.lower()]
        return sorted(rows, key=lambda o: o.id, reverse=True)[:limit]

    # neighborhoods
    async def get_neighborhood_by_code(self, session, code):
        return next((n for n in self.neighborhoods.values() if n.code == code), None)

    async def create_neighborhood(self, session, *, code, name):
        neighborhood = Neighborhood(id=next(self._ids["neighborhood"]), code=code, name=name)
        self.neighborhoods[neighborhood.id] = neighborhood
        return neighborhood

    async def list_recent_neighborhoods(self, session, *, limit):
        return sorted(self.neighborhoods.values(), key=lambda n: n.id, reverse=True)[:limit]

    # sales
    async def create_sale(self, session, *, property_id, sale_date, price, buyer=None, seller=None, doc_number=None):
        sale = Sale(
            id=next(self._ids["sale"]),
            property_id=property_id,
            sale_date=sale_date,
            price=price,
            buyer=buyer,
            seller=seller,
            doc_number=doc_number,
        )
        self.sales.append(sale)
        return sale

    async def list_sales(self, session, *, property_id, limit):
        rows = [s for s in self.sales if property_id is None or s.property_id == property_id]
        return sorted(rows, key=lambda s: (s.sale_date, s.id), reverse=True)[:limit]

    # assessments
    async def upsert_assessment(self, session, *, property_id, year, create_values, update_values):
        key = (property_id, year)
        assessment = self.assessments.get(key)
        if assessment is None:
            assessment = Assessment(property_id=property_id, year=year, **create_values)
            self.assessments[key] = assessment
        else:
            for column, value in update_values.items():
                setattr(assessment, column, value)
        return assessment

    async def list_assessments(self, session, *, property_id, year, limit):
        rows = [
            a for a in self.assessments.values() if a.property_id == property_id and (year is None or a.year == year)
        ]
        return sorted(rows, key=lambda a: a.year, reverse=True)[:limit]

    # improvements
    async def create_improvement(self, session, *, property_id, type, year_built=None, value=None):
        improvement = Improvement(
            id=next(self._ids["improvement"]), property_id=property_id, type=type, year_built=year_built, value=value
        )
        self.improvements.append(improvement)
        return improvement

    async def list_improvements(self, session, property_id):
        rows = [i for i in self.improvements if i.property_id == property_id]
        return sorted(sorted(rows, key=lambda i: i.id, reverse=True), key=lambda i: i.type)

    def seed_property(self, folio: str, **fields) -> Property:
        now = utcnow()
        property = Property(id=next(self._ids["property"]), folio=folio, created_at=now, updated_at=now)
        for key in ("address", "zip_code", "owner_id", "neighborhood_id"):
            setattr(property, key, fields.get(key))
        property.land_value = fields.get("land_value", Decimal("0"))
        property.building_value = fields.get("building_value", Decimal("0"))
        self.properties[property.id] = property
        return property


@pytest.fixture
def session() -> DummySession:
    return DummySession()


@pytest.fixture
def store(monkeypatch) -> FakeStore:
    fake = FakeStore()

    monkeypatch.setattr(properties_repo, "get_by_folio", fake.get_property_by_folio)
    monkeypatch.setattr(properties_repo, "get_by_id", fake.get_property_by_id)
    monkeypatch.setattr(properties_repo, "create_property", fake.create_property)
    monkeypatch.setattr(properties_repo, "delete_property", fake.delete_property)
    monkeypatch.setattr(properties_repo, "list_recent", fake.list_recent_properties)
    monkeypatch.setattr(properties_repo, "list_by_land_value", fake.list_by_land_value)
    monkeypatch.setattr(properties_repo, "count_above_building", fake.count_above_building)
    monkeypatch.setattr(properties_repo, "list_by_neighborhood", fake.list_by_neighborhood)

    monkeypatch.setattr(owners_repo, "get_by_id", fake.get_owner)
    monkeypatch.setattr(owners_repo, "create_owner", fake.create_owner)
    monkeypatch.setattr(owners_repo, "search_by_name", fake.search_owners)

    monkeypatch.setattr(neighborhoods_repo, "get_by_code", fake.get_neighborhood_by_code)
    monkeypatch.setattr(neighborhoods_repo, "create_neighborhood", fake.create_neighborhood)
    monkeypatch.setattr(neighborhoods_repo, "list_recent", fake.list_recent_neighborhoods)

    monkeypatch.setattr(sales_repo, "create_sale", fake.create_sale)
    monkeypatch.setattr(sales_repo, "list_sales", fake.list_sales)

    monkeypatch.setattr(assessments_repo, "upsert_assessment", fake.upsert_assessment)
    monkeypatch.setattr(assessments_repo, "list_assessments", fake.list_assessments)

    monkeypatch.setattr(improvements_repo, "create_improvement", fake.create_improvement)
    monkeypatch.setattr(improvements_repo, "list_for_property", fake.list_improvements)

    return fake


@pytest_asyncio.fixture
async def client(session: DummySession) -> AsyncIterator[AsyncClient]:
    async def _override_session() -> AsyncIterator[DummySession]:
        yield session

    app.dependency_overrides[get_session] = _override_session
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://testserver") as http:
            yield http
    finally:
        app.dependency_overrides.pop(get_session, None)
