import os
from datetime import datetime, time, timedelta, timezone
from decimal import Decimal

# Detect if we're running inside Docker container
if os.path.exists("/.dockerenv"):
    # Inside container - use service names
    DB_HOST = "postgres"
else:
    DB_HOST = "localhost"
DB_PORT = int(os.getenv("DB_PORT", "5432"))

# Credentials match scripts/setup_test_db.py, which creates the database
DB_USER = os.getenv("DB_USER", "viewings")
DB_PASSWORD = os.getenv("DB_PASSWORD", "viewings")

# Use environment variable to determine test database. An in-memory
# sqlite+aiosqlite URL also works but only guards exact duplicate slots.
TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    f"postgresql+asyncpg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/test_property_viewings",
)

# Settings are read at import time, so configure them before importing app
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("BUSINESS_TIMEZONE", "UTC")
os.environ.setdefault("SEED_LISTINGS", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.core.database import Base, create_schema, get_db
from app.main import app
from app.models.listing import Listing
from app.schemas.auth import Caller
from app.services.auth import AuthService


@pytest.fixture
async def db():
    """Create a fresh database session for each test."""
    engine_kwargs = {}
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine_kwargs = {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, **engine_kwargs)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)  # Clean slate
    await create_schema(engine)

    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def override_get_db(db: AsyncSession):
    """Override the get_db dependency to use test database."""

    async def _override_get_db():
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client(override_get_db):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client


@pytest.fixture
async def listing(db: AsyncSession) -> Listing:
    """A listing in the catalog."""
    listing = Listing(
        organization_id="ORG-TEST",
        compound_id="CMP-TEST",
        building_id="BLD-TEST",
        unit_id="UNIT-101",
        bua=100,
        total_bua=120,
        land_area=200,
        price=Decimal("1000000"),
        beds=3,
        bathrooms=2,
        amenities=["Pool", "Gym"],
        availability_days=["Monday", "Tuesday"],
    )
    db.add(listing)
    await db.commit()
    return listing


@pytest.fixture
async def other_listing(db: AsyncSession) -> Listing:
    listing = Listing(
        organization_id="ORG-TEST",
        building_id="BLD-TEST",
        unit_id="UNIT-202",
        bua=80,
        price=Decimal("800000"),
        beds=2,
        bathrooms=1,
    )
    db.add(listing)
    await db.commit()
    return listing


def viewing_day(days_ahead: int = 3):
    """A calendar day far enough out to clear the booking lead time."""
    return (datetime.now(timezone.utc) + timedelta(days=days_ahead)).date()


def at(day, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute), tzinfo=timezone.utc)


# Test Authentication Utilities
def get_auth_headers(email: str = "buyer@example.com") -> dict[str, str]:
    """Generate a bearer token header for the caller behind ``email``."""
    caller = Caller(caller_id=AuthService.caller_id_for(email), email=email)
    return {"Authorization": f"Bearer {AuthService.create_access_token(caller)}"}
