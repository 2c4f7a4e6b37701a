"""Sample listings inserted into an empty catalog."""

from decimal import Decimal

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.listing import Listing

logger = structlog.get_logger(__name__)

SAMPLE_LISTINGS = [
    {
        "organization_id": "ORG-001",
        "compound_id": "CMP-001",
        "building_id": "BLD-001",
        "unit_id": "UNIT-101",
        "bua": 120,
        "total_bua": 150,
        "land_area": 200,
        "price": Decimal("2500000"),
        "beds": 3,
        "bathrooms": 2,
        "amenities": ["Swimming Pool", "Gym", "Security", "Parking"],
        "availability_days": ["Saturday", "Sunday"],
    },
    {
        "organization_id": "ORG-001",
        "compound_id": "CMP-002",
        "building_id": "BLD-002",
        "unit_id": "UNIT-202",
        "bua": 85,
        "total_bua": 100,
        "land_area": 150,
        "price": Decimal("1800000"),
        "beds": 2,
        "bathrooms": 2,
        "amenities": ["Garden", "Playground", "24/7 Security", "Underground Parking"],
        "availability_days": ["Monday", "Tuesday", "Thursday"],
    },
    {
        "organization_id": "ORG-002",
        "compound_id": "CMP-003",
        "building_id": "BLD-003",
        "unit_id": "UNIT-303",
        "bua": 200,
        "total_bua": 250,
        "land_area": 300,
        "price": Decimal("4500000"),
        "beds": 4,
        "bathrooms": 3,
        "amenities": ["Private Pool", "Smart Home", "Garden", "Security", "Parking"],
        "availability_days": [
            "Saturday",
            "Sunday",
            "Monday",
            "Tuesday",
            "Wednesday",
            "Thursday",
        ],
    },
    {
        "organization_id": "ORG-002",
        "compound_id": "CMP-004",
        "building_id": "BLD-004",
        "unit_id": "UNIT-404",
        "bua": 65,
        "total_bua": 80,
        "land_area": 100,
        "price": Decimal("1200000"),
        "beds": 1,
        "bathrooms": 1,
        "amenities": ["Security", "Parking", "Gym"],
        "availability_days": [
            "Saturday",
            "Sunday",
            "Monday",
            "Tuesday",
            "Wednesday",
            "Thursday",
        ],
    },
    {
        "organization_id": "ORG-003",
        "compound_id": "CMP-005",
        "building_id": "BLD-005",
        "unit_id": "UNIT-505",
        "bua": 150,
        "total_bua": 180,
        "land_area": 250,
        "price": Decimal("3200000"),
        "beds": 3,
        "bathrooms": 2.5,
        "amenities": [
            "Swimming Pool",
            "Gym",
            "Security",
            "Parking",
            "Garden",
            "Playground",
        ],
        "availability_days": [
            "Saturday",
            "Sunday",
            "Monday",
            "Tuesday",
            "Wednesday",
            "Thursday",
        ],
    },
]


async def seed_listings(db: AsyncSession) -> int:
    """Insert the sample listings if the catalog is empty.

    Returns the number of listings inserted.
    """
    existing = (await db.execute(select(func.count(Listing.id)))).scalar_one()
    if existing:
        logger.info("Listing catalog already populated", count=existing)
        return 0

    db.add_all([Listing(**data) for data in SAMPLE_LISTINGS])
    await db.commit()

    logger.info("Seeded sample listings", count=len(SAMPLE_LISTINGS))
    return len(SAMPLE_LISTINGS)
