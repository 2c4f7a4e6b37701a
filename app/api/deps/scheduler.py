from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps.database import get_db
from app.services.listing import ListingService
from app.services.viewing import SqlViewingRepository, ViewingSchedulerService


def get_listing_service(db: AsyncSession = Depends(get_db)) -> ListingService:
    return ListingService(db)


def get_scheduler(
    db: AsyncSession = Depends(get_db),
    listings: ListingService = Depends(get_listing_service),
) -> ViewingSchedulerService:
    """Wire the scheduler to the request's session."""
    return ViewingSchedulerService(store=SqlViewingRepository(db), listings=listings)
