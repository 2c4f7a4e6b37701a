from typing import List

from fastapi import APIRouter, Depends

from app.api.deps.scheduler import get_listing_service
from app.schemas.common import DataResponse
from app.schemas.listing import Listing
from app.services.listing import ListingService

router = APIRouter()


@router.get("/", response_model=DataResponse[List[Listing]])
async def list_listings(listings: ListingService = Depends(get_listing_service)):
    """Get all listings available for viewing."""
    return {"data": await listings.list_listings()}


@router.get("/{listing_id}", response_model=DataResponse[Listing])
async def get_listing(
    listing_id: str, listings: ListingService = Depends(get_listing_service)
):
    """Get a single listing by ID."""
    return {"data": await listings.resolve(listing_id)}
