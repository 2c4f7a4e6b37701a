import pytest

from app.core.exceptions import (
    LeadTimeViolationError,
    ListingNotFoundError,
    SchedulingError,
    SlotConflictError,
    ViewingForbiddenError,
)


class TestSchedulingErrors:
    def test_default_message(self):
        error = SlotConflictError()

        assert error.message == "There is already a viewing scheduled for this time slot"
        assert str(error) == error.message
        assert error.status_code == 409

    def test_explicit_message(self):
        error = ListingNotFoundError("Listing with ID abc not found")

        assert error.message == "Listing with ID abc not found"
        assert error.status_code == 404

    def test_explicit_none_falls_back_to_default(self):
        assert LeadTimeViolationError(None).message == (
            "Viewing must be scheduled at least 24 hours in advance"
        )

    @pytest.mark.parametrize(
        "error_class,status_code",
        [
            (SchedulingError, 400),
            (LeadTimeViolationError, 400),
            (ViewingForbiddenError, 403),
        ],
    )
    def test_status_codes(self, error_class, status_code):
        assert error_class().status_code == status_code
