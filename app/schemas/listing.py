from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class Listing(BaseModel):
    id: UUID
    organization_id: str
    compound_id: Optional[str] = None
    building_id: str
    unit_id: str
    bua: float
    total_bua: Optional[float] = None
    land_area: Optional[float] = None
    price: Decimal
    beds: int
    bathrooms: float
    amenities: List[str] = Field(default_factory=list)
    availability_days: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ListingSummary(BaseModel):
    """Listing fields shown alongside a caller's viewings."""

    id: UUID
    building_id: str
    unit_id: str
    compound_id: Optional[str] = None
    price: Decimal
    beds: int
    bathrooms: float

    class Config:
        from_attributes = True
