import uuid

from sqlalchemy import JSON, Column, DateTime, Float, Integer, Numeric, String, Uuid
from sqlalchemy.sql import func

from app.core.database import Base


class Listing(Base):
    """Real-estate unit that can be viewed. Read-only to the scheduler."""

    __tablename__ = "listings"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Catalog placement
    organization_id = Column(String(64), nullable=False)
    compound_id = Column(String(64), nullable=True)
    building_id = Column(String(64), nullable=False)
    unit_id = Column(String(64), nullable=False, index=True)

    # Unit attributes
    bua = Column(Float, nullable=False)  # built-up area
    total_bua = Column(Float, nullable=True)
    land_area = Column(Float, nullable=True)
    price = Column(Numeric(14, 2), nullable=False)
    beds = Column(Integer, nullable=False, default=0)
    bathrooms = Column(Float, nullable=False, default=0)
    amenities = Column(JSON, nullable=False, default=list)
    availability_days = Column(JSON, nullable=False, default=list)

    # Audit timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return (
            f"<Listing(id={self.id}, unit_id='{self.unit_id}', "
            f"building_id='{self.building_id}')>"
        )
