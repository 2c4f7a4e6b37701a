from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps.auth import get_current_caller
from app.api.deps.scheduler import get_scheduler
from app.schemas.auth import Caller
from app.schemas.common import DataResponse
from app.schemas.viewing import (
    AvailableSlot,
    Viewing,
    ViewingCreate,
    ViewingWithListing,
)
from app.services.viewing import ViewingSchedulerService

router = APIRouter(dependencies=[Depends(get_current_caller)])


@router.post(
    "/schedule",
    response_model=DataResponse[Viewing],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Request violates the booking policy"},
        404: {"description": "Listing not found"},
        409: {"description": "Time slot is already booked"},
    },
)
async def schedule_viewing(
    request: ViewingCreate,
    caller: Caller = Depends(get_current_caller),
    scheduler: ViewingSchedulerService = Depends(get_scheduler),
):
    """
    Schedule a new viewing for a listing.

    The viewing must start at least 24 hours from now, last between 30 minutes
    and 2 hours, and fall within business hours (9 AM to 6 PM).
    """
    viewing = await scheduler.schedule_viewing(
        request.listing_id,
        caller.caller_id,
        request.start_time,
        request.end_time,
        request.notes,
    )
    return {"data": viewing, "message": "Viewing scheduled successfully"}


@router.get(
    "/available-slots/{listing_id}",
    response_model=DataResponse[List[AvailableSlot]],
    responses={
        400: {"description": "Invalid duration"},
        404: {"description": "Listing not found"},
    },
)
async def get_available_slots(
    listing_id: str,
    day: date = Query(..., alias="date", description="Date in YYYY-MM-DD format"),
    duration: Optional[int] = Query(
        None, description="Slot length in minutes (default 30, min 30, max 120)"
    ),
    scheduler: ViewingSchedulerService = Depends(get_scheduler),
):
    """Get the day's viewing slots for a listing with their availability."""
    slots = await scheduler.get_available_slots(listing_id, day, duration)
    return {"data": slots}


@router.get("/my-viewings", response_model=DataResponse[List[ViewingWithListing]])
async def get_my_viewings(
    caller: Caller = Depends(get_current_caller),
    scheduler: ViewingSchedulerService = Depends(get_scheduler),
):
    """Get all viewings scheduled by the authenticated caller, with listing details."""
    viewings = await scheduler.get_caller_viewings(caller.caller_id)
    return {"data": viewings}


@router.delete(
    "/{viewing_id}",
    response_model=DataResponse[Viewing],
    responses={
        403: {"description": "Not authorized to cancel this viewing"},
        404: {"description": "Viewing not found"},
    },
)
async def cancel_viewing(
    viewing_id: str,
    caller: Caller = Depends(get_current_caller),
    scheduler: ViewingSchedulerService = Depends(get_scheduler),
):
    """Cancel a viewing. Only the caller who scheduled it may cancel it."""
    viewing = await scheduler.cancel_viewing(viewing_id, caller.caller_id)
    return {"data": viewing, "message": "Viewing cancelled successfully"}
