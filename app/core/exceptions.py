"""Domain errors raised by the scheduling core.

Each error carries the HTTP status the presentation layer reports it with.
"""

from typing import Optional

from fastapi import status


class SchedulingError(Exception):
    """Base exception for viewing scheduling failures."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Scheduling request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidIntervalError(SchedulingError):
    default_message = "End time must be after start time"


class LeadTimeViolationError(SchedulingError):
    default_message = "Viewing must be scheduled at least 24 hours in advance"


class DurationViolationError(SchedulingError):
    default_message = "Viewing duration must be between 30 minutes and 2 hours"


class BusinessHoursViolationError(SchedulingError):
    default_message = "Viewings can only be scheduled between 9 AM and 6 PM"


class InvalidDurationError(SchedulingError):
    default_message = "Slot duration must be between 30 and 120 minutes"


class ListingNotFoundError(SchedulingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Listing not found"


class SlotConflictError(SchedulingError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "There is already a viewing scheduled for this time slot"


class ViewingNotFoundError(SchedulingError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Viewing not found"


class ViewingForbiddenError(SchedulingError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not authorized to cancel this viewing"


class AuthenticationError(Exception):
    """Bearer token missing, malformed or expired."""
