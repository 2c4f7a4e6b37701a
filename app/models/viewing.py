import enum
import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import ExcludeConstraint
from sqlalchemy.orm import relationship

from app.core.database import Base


class ViewingStatus(enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


ACTIVE_VIEWING_CLAUSE = "status <> 'cancelled'"


class Viewing(Base):
    """Scheduled appointment to inspect a listing during a time interval."""

    __tablename__ = "viewings"

    # Core identity
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    listing_id = Column(
        Uuid(as_uuid=True), ForeignKey("listings.id"), nullable=False, index=True
    )
    caller_id = Column(String(255), nullable=False, index=True)

    # Scheduling details
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=False)

    # Status management
    status = Column(
        String(20), nullable=False, default=ViewingStatus.PENDING.value, index=True
    )

    notes = Column(Text, nullable=True)

    # Audit timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    listing = relationship("Listing")

    # Constraints
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="check_end_after_start"),
        # Exact double-booking guard, portable across backends
        Index(
            "uq_viewings_listing_slot_active",
            "listing_id",
            "start_time",
            "end_time",
            unique=True,
            postgresql_where=text(ACTIVE_VIEWING_CLAUSE),
            sqlite_where=text(ACTIVE_VIEWING_CLAUSE),
        ),
        # Any-overlap guard; needs the btree_gist extension
        ExcludeConstraint(
            ("listing_id", "="),
            (func.tstzrange(start_time, end_time, text("'[)'")), "&&"),
            name="excl_viewings_listing_overlap_active",
            using="gist",
            where=text(ACTIVE_VIEWING_CLAUSE),
        ).ddl_if(dialect="postgresql"),
    )

    # Status transition methods
    def can_transition_to(self, new_status: ViewingStatus) -> bool:
        """Check if the viewing can move to the new status."""
        current = ViewingStatus(self.status)

        allowed_transitions = {
            ViewingStatus.PENDING: [ViewingStatus.CONFIRMED, ViewingStatus.CANCELLED],
            ViewingStatus.CONFIRMED: [ViewingStatus.CANCELLED],
            ViewingStatus.CANCELLED: [],  # Final state
        }

        return new_status in allowed_transitions.get(current, [])

    def cancel(self) -> bool:
        """Mark the viewing cancelled. Returns False if already cancelled."""
        if not self.can_transition_to(ViewingStatus.CANCELLED):
            return False
        self.status = ViewingStatus.CANCELLED.value
        return True

    @property
    def is_active(self) -> bool:
        """Active viewings block their interval for the listing."""
        return self.status != ViewingStatus.CANCELLED.value

    def __repr__(self):
        return (
            f"<Viewing(id={self.id}, status='{self.status}', "
            f"listing_id={self.listing_id}, start='{self.start_time}', "
            f"end='{self.end_time}')>"
        )
