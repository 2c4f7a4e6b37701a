from typing import Protocol, Union
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ListingNotFoundError
from app.models.listing import Listing

logger = structlog.get_logger(__name__)


class ListingLookup(Protocol):
    """Resolves listings for the scheduler; never creates or mutates them."""

    async def resolve(self, listing_id: Union[str, UUID]) -> Listing: ...


class ListingService:
    """Read-only access to the listing catalog."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve(self, listing_id: Union[str, UUID]) -> Listing:
        """Get a listing by ID or raise ListingNotFoundError."""
        try:
            key = listing_id if isinstance(listing_id, UUID) else UUID(str(listing_id))
        except ValueError:
            logger.warning("Malformed listing ID", listing_id=str(listing_id))
            raise ListingNotFoundError(f"Listing with ID {listing_id} not found")

        result = await self.db.execute(select(Listing).where(Listing.id == key))
        listing = result.scalar_one_or_none()

        if not listing:
            logger.warning("Listing not found", listing_id=str(key))
            raise ListingNotFoundError(f"Listing with ID {listing_id} not found")

        return listing

    async def list_listings(self) -> list[Listing]:
        """Get all listings ordered by unit."""
        result = await self.db.execute(
            select(Listing).order_by(Listing.building_id, Listing.unit_id)
        )
        return list(result.scalars().all())
