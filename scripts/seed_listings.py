#!/usr/bin/env python3
"""
Create the schema and insert the sample listings into the configured database.
"""

import asyncio

from app.core.database import AsyncSessionLocal, engine, init_db
from app.core.logging import configure_logging
from app.db.seed import seed_listings


async def main():
    configure_logging()
    await init_db()
    async with AsyncSessionLocal() as session:
        inserted = await seed_listings(session)
    await engine.dispose()
    print(f"Inserted {inserted} listings")


if __name__ == "__main__":
    asyncio.run(main())
