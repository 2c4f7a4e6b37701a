from datetime import date as date_type
from datetime import datetime, time, timedelta, timezone
from typing import Callable, Optional, Protocol, Union
from uuid import UUID

import structlog
from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import (
    BusinessHoursViolationError,
    DurationViolationError,
    InvalidDurationError,
    InvalidIntervalError,
    LeadTimeViolationError,
    SlotConflictError,
    ViewingForbiddenError,
    ViewingNotFoundError,
)
from app.models.viewing import Viewing, ViewingStatus
from app.schemas.viewing import AvailableSlot
from app.services.listing import ListingLookup
from app.services.slots import (
    business_day_bounds,
    compute_slots,
    get_business_timezone,
    to_utc,
)

logger = structlog.get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ViewingStore(Protocol):
    """Persistence operations the scheduler needs from the viewing ledger."""

    async def add(self, viewing: Viewing) -> Viewing: ...

    async def count_overlapping(
        self, listing_id: UUID, start_time: datetime, end_time: datetime
    ) -> int: ...

    async def find_for_listing_between(
        self, listing_id: UUID, window_start: datetime, window_end: datetime
    ) -> list[Viewing]: ...

    async def find_by_caller(self, caller_id: str) -> list[Viewing]: ...

    async def get(self, viewing_id: UUID) -> Optional[Viewing]: ...

    async def save(self, viewing: Viewing) -> Viewing: ...


class SqlViewingRepository:
    """Viewing ledger backed by the ``viewings`` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, viewing: Viewing) -> Viewing:
        """Insert and commit. Constraint violations roll back and propagate."""
        self.db.add(viewing)
        try:
            await self.db.flush()
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise
        await self.db.refresh(viewing)
        return viewing

    async def count_overlapping(
        self, listing_id: UUID, start_time: datetime, end_time: datetime
    ) -> int:
        query = select(func.count(Viewing.id)).where(
            and_(
                Viewing.listing_id == listing_id,
                Viewing.status != ViewingStatus.CANCELLED.value,
                Viewing.start_time < end_time,
                Viewing.end_time > start_time,
            )
        )
        return (await self.db.execute(query)).scalar_one()

    async def find_for_listing_between(
        self, listing_id: UUID, window_start: datetime, window_end: datetime
    ) -> list[Viewing]:
        query = (
            select(Viewing)
            .where(
                and_(
                    Viewing.listing_id == listing_id,
                    Viewing.status != ViewingStatus.CANCELLED.value,
                    Viewing.start_time < window_end,
                    Viewing.end_time > window_start,
                )
            )
            .order_by(Viewing.start_time.asc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_by_caller(self, caller_id: str) -> list[Viewing]:
        query = (
            select(Viewing)
            .options(selectinload(Viewing.listing))
            .where(Viewing.caller_id == caller_id)
            .order_by(Viewing.start_time.asc())
        )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get(self, viewing_id: UUID) -> Optional[Viewing]:
        result = await self.db.execute(select(Viewing).where(Viewing.id == viewing_id))
        return result.scalar_one_or_none()

    async def save(self, viewing: Viewing) -> Viewing:
        await self.db.flush()
        await self.db.commit()
        await self.db.refresh(viewing)
        return viewing


class ViewingSchedulerService:
    """Schedules, lists and cancels property viewings.

    Policy checks run before any write. The application-level overlap check
    only exists to fail fast with a friendly error; the storage constraint is
    what actually rules out double-booking under concurrent requests.
    """

    def __init__(
        self,
        store: ViewingStore,
        listings: ListingLookup,
        clock: Callable[[], datetime] = utc_now,
        settings: Settings = default_settings,
    ):
        self.store = store
        self.listings = listings
        self.clock = clock
        self.settings = settings
        self.business_tz = get_business_timezone(settings.BUSINESS_TIMEZONE)

    async def schedule_viewing(
        self,
        listing_id: Union[str, UUID],
        caller_id: str,
        start_time: datetime,
        end_time: datetime,
        notes: Optional[str] = None,
    ) -> Viewing:
        """Validate the requested interval and book it for the caller."""
        start_time = self._normalize(start_time)
        end_time = self._normalize(end_time)

        self.validate_time_slot(start_time, end_time)

        listing = await self.listings.resolve(listing_id)
        listing_key = listing.id

        if await self.store.count_overlapping(listing_key, start_time, end_time) > 0:
            logger.info(
                "Viewing slot already taken",
                listing_id=str(listing_key),
                start_time=start_time.isoformat(),
                end_time=end_time.isoformat(),
            )
            raise SlotConflictError()

        viewing = Viewing(
            listing_id=listing_key,
            caller_id=caller_id,
            start_time=start_time,
            end_time=end_time,
            status=ViewingStatus.PENDING.value,
            notes=notes,
        )

        try:
            viewing = await self.store.add(viewing)
        except IntegrityError as e:
            # Lost the race to a concurrent booking of an overlapping slot
            logger.warning(
                "Viewing insert rejected by storage constraint",
                listing_id=str(listing_key),
                start_time=start_time.isoformat(),
                error=str(e.orig) if e.orig is not None else str(e),
            )
            raise SlotConflictError() from e

        logger.info(
            "Viewing scheduled",
            viewing_id=str(viewing.id),
            listing_id=str(listing_key),
            caller_id=caller_id,
            start_time=start_time.isoformat(),
            end_time=end_time.isoformat(),
        )
        return viewing

    async def get_available_slots(
        self,
        listing_id: Union[str, UUID],
        day: date_type,
        duration_minutes: Optional[int] = None,
    ) -> list[AvailableSlot]:
        """Get the day's candidate slots for a listing with availability flags."""
        if duration_minutes is None:
            duration_minutes = self.settings.DEFAULT_SLOT_MINUTES

        if not (
            self.settings.MIN_VIEWING_MINUTES
            <= duration_minutes
            <= self.settings.MAX_VIEWING_MINUTES
        ):
            raise InvalidDurationError(
                f"Slot duration must be between {self.settings.MIN_VIEWING_MINUTES} "
                f"and {self.settings.MAX_VIEWING_MINUTES} minutes"
            )

        listing = await self.listings.resolve(listing_id)

        day_start, day_end = business_day_bounds(
            day,
            self.business_tz,
            self.settings.BUSINESS_OPEN_HOUR,
            self.settings.BUSINESS_CLOSE_HOUR,
        )
        viewings = await self.store.find_for_listing_between(
            listing.id, to_utc(day_start), to_utc(day_end)
        )

        return compute_slots(viewings, day_start, day_end, duration_minutes)

    async def get_caller_viewings(self, caller_id: str) -> list[Viewing]:
        """Get every viewing the caller booked, earliest first, with its listing."""
        return await self.store.find_by_caller(caller_id)

    async def cancel_viewing(
        self, viewing_id: Union[str, UUID], caller_id: str
    ) -> Viewing:
        """Cancel a caller's own viewing. Cancelling twice is a no-op."""
        try:
            key = viewing_id if isinstance(viewing_id, UUID) else UUID(str(viewing_id))
        except ValueError:
            raise ViewingNotFoundError(f"Viewing with ID {viewing_id} not found")

        viewing = await self.store.get(key)
        if not viewing:
            raise ViewingNotFoundError(f"Viewing with ID {viewing_id} not found")

        if viewing.caller_id != caller_id:
            logger.warning(
                "Cancellation attempted by non-owner",
                viewing_id=str(key),
                caller_id=caller_id,
            )
            raise ViewingForbiddenError()

        if not viewing.cancel():
            logger.info("Viewing already cancelled", viewing_id=str(key))
            return viewing

        viewing = await self.store.save(viewing)
        logger.info("Viewing cancelled", viewing_id=str(key), caller_id=caller_id)
        return viewing

    def validate_time_slot(self, start_time: datetime, end_time: datetime) -> None:
        """Apply the booking policy checks in order; the first failure wins."""
        if start_time >= end_time:
            raise InvalidIntervalError()

        min_lead = timedelta(hours=self.settings.MIN_LEAD_TIME_HOURS)
        if start_time < self.clock() + min_lead:
            raise LeadTimeViolationError(
                f"Viewing must be scheduled at least "
                f"{self.settings.MIN_LEAD_TIME_HOURS} hours in advance"
            )

        duration = end_time - start_time
        if not (
            timedelta(minutes=self.settings.MIN_VIEWING_MINUTES)
            <= duration
            <= timedelta(minutes=self.settings.MAX_VIEWING_MINUTES)
        ):
            raise DurationViolationError()

        local_start = start_time.astimezone(self.business_tz)
        local_end = end_time.astimezone(self.business_tz)
        opens = time(self.settings.BUSINESS_OPEN_HOUR, 0)
        closes = time(self.settings.BUSINESS_CLOSE_HOUR, 0)

        if (
            local_start.date() != local_end.date()
            or local_start.time() < opens
            or local_end.time() > closes
        ):
            raise BusinessHoursViolationError()

    def _normalize(self, value: datetime) -> datetime:
        # Naive input is wall-clock time in the business timezone
        if value.tzinfo is None:
            value = value.replace(tzinfo=self.business_tz)
        return value.astimezone(timezone.utc)
