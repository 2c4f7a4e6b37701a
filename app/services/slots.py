"""Available-slot generation for a listing's business day.

Everything here is plain computation over datetimes: no I/O, no session.
"""

from datetime import date as date_type
from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Iterable

import structlog
from zoneinfo import ZoneInfo

from app.models.viewing import ViewingStatus
from app.schemas.viewing import AvailableSlot

logger = structlog.get_logger(__name__)


def get_business_timezone(name: str) -> tzinfo:
    """Resolve an IANA timezone name, short-circuiting UTC."""
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def to_utc(value: datetime) -> datetime:
    """Normalize to an aware UTC datetime. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def intervals_overlap(
    a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime
) -> bool:
    """Half-open overlap: [a_start, a_end) and [b_start, b_end) share an instant."""
    return a_start < b_end and b_start < a_end


def business_day_bounds(
    day: date_type, tz: tzinfo, open_hour: int = 9, close_hour: int = 18
) -> tuple[datetime, datetime]:
    """Return the aware opening and closing instants of ``day`` in ``tz``."""
    day_start = datetime.combine(day, time(open_hour, 0), tzinfo=tz)
    day_end = datetime.combine(day, time(close_hour, 0), tzinfo=tz)
    return day_start, day_end


def compute_slots(
    existing_viewings: Iterable,
    day_start: datetime,
    day_end: datetime,
    duration_minutes: int,
) -> list[AvailableSlot]:
    """
    Split ``[day_start, day_end)`` into back-to-back windows of
    ``duration_minutes`` and flag each one.

    A window is unavailable iff it overlaps any non-cancelled viewing in
    ``existing_viewings`` (objects exposing ``start_time``, ``end_time`` and
    optionally ``status``). Windows that would run past ``day_end`` are not
    generated, so the result holds ``floor((day_end - day_start) / duration)``
    slots.
    """
    if duration_minutes <= 0:
        raise ValueError("duration_minutes must be positive")

    busy = [
        (to_utc(v.start_time), to_utc(v.end_time))
        for v in existing_viewings
        if getattr(v, "status", None) != ViewingStatus.CANCELLED.value
    ]

    slot_duration = timedelta(minutes=duration_minutes)
    slots = []
    current = day_start

    while current + slot_duration <= day_end:
        slot_end = current + slot_duration
        window = (to_utc(current), to_utc(slot_end))
        available = not any(
            intervals_overlap(window[0], window[1], start, end)
            for start, end in busy
        )
        slots.append(
            AvailableSlot(start_time=current, end_time=slot_end, available=available)
        )
        current = slot_end

    logger.debug(
        "Computed slots",
        day_start=day_start.isoformat(),
        total=len(slots),
        busy_intervals=len(busy),
        available=sum(1 for s in slots if s.available),
    )
    return slots
