#!/usr/bin/env python3
"""
Create a fresh PostgreSQL test database for running the suite against
PostgreSQL (and so exercising the viewing overlap exclusion constraint).

    python scripts/setup_test_db.py           # create
    python scripts/setup_test_db.py cleanup   # drop

Then run the tests with TEST_DATABASE_URL set to the printed URL.
"""

import asyncio
import os
import sys

import asyncpg
from sqlalchemy.ext.asyncio import create_async_engine

from app.core.database import create_schema

TEST_DB_NAME = "test_property_viewings"
MASTER_DB_NAME = "property_viewings"

# Inside the compose network the database is reachable by service name
DB_HOST = "postgres" if os.path.exists("/.dockerenv") else "localhost"
DB_PORT = int(os.getenv("DB_PORT", "5432"))
DB_USER = os.getenv("DB_USER", "viewings")
DB_PASSWORD = os.getenv("DB_PASSWORD", "viewings")

TEST_DB_URL = (
    f"postgresql+asyncpg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:"
    f"{DB_PORT}/{TEST_DB_NAME}"
)


async def _master_connection() -> asyncpg.Connection:
    return await asyncpg.connect(
        host=DB_HOST,
        port=DB_PORT,
        user=DB_USER,
        password=DB_PASSWORD,
        database=MASTER_DB_NAME,
    )


async def setup_test_database() -> bool:
    """Drop and recreate the test database, then create the schema."""
    print(f"Setting up test database: {TEST_DB_NAME}")

    try:
        master_conn = await _master_connection()
        await master_conn.execute(f"DROP DATABASE IF EXISTS {TEST_DB_NAME}")
        await master_conn.execute(f"CREATE DATABASE {TEST_DB_NAME}")
        await master_conn.close()

        engine = create_async_engine(TEST_DB_URL, echo=False)
        await create_schema(engine)
        await engine.dispose()
    except (OSError, asyncpg.PostgresError) as e:
        print(f"Error setting up test database: {e}")
        print(f"Make sure PostgreSQL is reachable at {DB_HOST}:{DB_PORT} as {DB_USER}")
        return False

    print(f"Test database ready: {TEST_DB_URL}")
    return True


async def cleanup_test_database() -> bool:
    """Drop the test database."""
    try:
        master_conn = await _master_connection()
        await master_conn.execute(f"DROP DATABASE IF EXISTS {TEST_DB_NAME}")
        await master_conn.close()
    except (OSError, asyncpg.PostgresError) as e:
        print(f"Error cleaning up test database: {e}")
        return False

    print(f"Dropped test database: {TEST_DB_NAME}")
    return True


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "cleanup":
        ok = asyncio.run(cleanup_test_database())
    else:
        ok = asyncio.run(setup_test_database())
    sys.exit(0 if ok else 1)
