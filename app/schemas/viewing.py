from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.models.viewing import ViewingStatus
from app.schemas.listing import ListingSummary


def _ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
    # Some backends (SQLite) hand back naive datetimes; they are stored as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ViewingCreate(BaseModel):
    listing_id: str = Field(..., min_length=1, description="ID of the listing to view")
    start_time: datetime = Field(..., description="Start of the viewing, ISO 8601")
    end_time: datetime = Field(..., description="End of the viewing, ISO 8601")
    notes: Optional[str] = Field(None, max_length=2000)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "listing_id": "0b8f4a52-9a3c-4d6e-9a57-1f0f7f1b2c3d",
                    "start_time": "2025-08-01T10:00:00.000Z",
                    "end_time": "2025-08-01T10:30:00.000Z",
                    "notes": "Interested in the property for investment purposes",
                }
            ]
        }
    }


class Viewing(BaseModel):
    id: UUID
    listing_id: UUID
    caller_id: str
    start_time: datetime
    end_time: datetime
    status: ViewingStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("start_time", "end_time", "created_at", "updated_at")
    @classmethod
    def ensure_aware(cls, v):
        return _ensure_aware(v)

    class Config:
        from_attributes = True


class ViewingWithListing(Viewing):
    listing: Optional[ListingSummary] = None


class AvailableSlot(BaseModel):
    start_time: datetime
    end_time: datetime
    available: bool
