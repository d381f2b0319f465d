"""Create the database schema, report view and procedure, then seed demo data."""
from __future__ import annotations

import asyncio
from datetime import date
from decimal import Decimal

from sqlalchemy import select, text

from appraisal.core.config import settings
from appraisal.db.session import Database
from appraisal.models.assessment import Assessment
from appraisal.models.base import Base, utcnow
from appraisal.models.improvement import Improvement
from appraisal.models.neighborhood import Neighborhood
from appraisal.models.owner import Owner
from appraisal.models.property import Property
from appraisal.models.sale import Sale

SUMMARY_VIEW = text(
    """
    CREATE OR REPLACE VIEW v_property_summary AS
    SELECT
        p.id,
        p.folio,
        p.address,
        p.land_value,
        p.building_value,
        p.updated_at,
        o.name AS owner_name,
        o.email AS owner_email,
        n.code AS neighborhood_code,
        n.name AS neighborhood_name,
        a.year AS latest_year,
        a.market_value AS latest_market_value,
        a.assessed_value AS latest_assessed_value,
        a.land_value AS latest_land_value,
        a.building_value AS latest_building_value
    FROM properties p
    LEFT JOIN owners o ON o.id = p.owner_id
    LEFT JOIN neighborhoods n ON n.id = p.neighborhood_id
    LEFT JOIN LATERAL (
        SELECT *
        FROM assessments
        WHERE assessments.property_id = p.id
        ORDER BY year DESC
        LIMIT 1
    ) a ON TRUE
    """
)

ADJUST_PROCEDURE = text(
    """
    CREATE OR REPLACE PROCEDURE sp_adjust_land_values_by_zip(p_zip text, p_percent numeric)
    LANGUAGE plpgsql
    AS $$
    BEGIN
        UPDATE properties
        SET land_value = land_value * (1 + p_percent / 100),
            updated_at = now()
        WHERE zip_code = p_zip
          AND land_value IS NOT NULL;
    END;
    $$
    """
)

NEIGHBORHOOD = {"code": "1130", "name": "Downtown"}
OWNER = {"name": "Jane Doe", "email": "jane@example.com"}
PROPERTY = {
    "folio": "F1001",
    "address": "123 Main St",
    "zip_code": "33101",
    "land_value": Decimal("80000"),
    "building_value": Decimal("220000"),
}
ASSESSMENT = {
    "year": 2025,
    "market_value": Decimal("360000"),
    "assessed_value": Decimal("320000"),
    "land_value": Decimal("90000"),
    "building_value": Decimal("270000"),
}
IMPROVEMENTS = [
    {"type": "Pool", "value": Decimal("15000"), "year_built": 2019},
    {"type": "Roof", "value": Decimal("12000"), "year_built": 2021},
]
SALE = {
    "sale_date": date(2024, 11, 15),
    "price": Decimal("415000"),
    "doc_number": "OR 12345-6789",
    "buyer": "Acme LLC",
    "seller": "Jane Doe",
}


async def create_schema(database: Database) -> None:
    """Create tables, the summary view and the ZIP adjustment procedure."""

    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        await conn.execute(SUMMARY_VIEW)
        await conn.execute(ADJUST_PROCEDURE)


async def seed(database: Database) -> None:
    """Insert or refresh the demo records; safe to run repeatedly."""

    async with database.sessionmaker() as session:
        async with session.begin():
            neighborhood = (
                await session.execute(select(Neighborhood).where(Neighborhood.code == NEIGHBORHOOD["code"]))
            ).scalar_one_or_none()
            if neighborhood is None:
                neighborhood = Neighborhood(**NEIGHBORHOOD)
                session.add(neighborhood)
            else:
                neighborhood.name = NEIGHBORHOOD["name"]

            owner = (await session.execute(select(Owner).where(Owner.email == OWNER["email"]))).scalar_one_or_none()
            if owner is None:
                owner = Owner(**OWNER)
                session.add(owner)
            else:
                owner.name = OWNER["name"]
            await session.flush()

            property_obj = (
                await session.execute(select(Property).where(Property.folio == PROPERTY["folio"]))
            ).scalar_one_or_none()
            if property_obj is None:
                property_obj = Property(**PROPERTY, owner_id=owner.id, neighborhood_id=neighborhood.id)
                session.add(property_obj)
            else:
                for key, value in PROPERTY.items():
                    setattr(property_obj, key, value)
                property_obj.owner_id = owner.id
                property_obj.neighborhood_id = neighborhood.id
                property_obj.updated_at = utcnow()
            await session.flush()

            assessment = await session.get(Assessment, (property_obj.id, ASSESSMENT["year"]))
            if assessment is None:
                session.add(Assessment(property_id=property_obj.id, **ASSESSMENT))
            else:
                for key, value in ASSESSMENT.items():
                    setattr(assessment, key, value)

            # Improvements and sales have no natural unique key; check before inserting.
            for item in IMPROVEMENTS:
                exists = (
                    await session.execute(
                        select(Improvement.id).where(
                            Improvement.property_id == property_obj.id,
                            Improvement.type == item["type"],
                            Improvement.year_built == item["year_built"],
                        )
                    )
                ).first()
                if exists is None:
                    session.add(Improvement(property_id=property_obj.id, **item))

            sale_exists = (
                await session.execute(
                    select(Sale.id).where(
                        Sale.property_id == property_obj.id,
                        Sale.sale_date == SALE["sale_date"],
                        Sale.price == SALE["price"],
                        Sale.buyer == SALE["buyer"],
                        Sale.seller == SALE["seller"],
                    )
                )
            ).first()
            if sale_exists is None:
                session.add(Sale(property_id=property_obj.id, **SALE))


async def main() -> None:
    database = Database.from_settings(settings)
    try:
        await create_schema(database)
        await seed(database)
    finally:
        await database.dispose()
    print("Database schema ensured and demo data seeded.")


if __name__ == "__main__":
    asyncio.run(main())
