"""
Base Pydantic schemas
"""

from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional
from uuid import UUID


class BaseSchema(BaseModel):
    """Base schema with common configuration"""
    model_config = ConfigDict(
        from_attributes=True,
        use_enum_values=True,
    )


class TimestampSchema(BaseSchema):
    """Schema with timestamp fields"""
    created_at: datetime
    updated_at: Optional[datetime] = None


class IDSchema(BaseSchema):
    """Schema with ID field"""
    id: UUID


class ProfileSummary(IDSchema):
    """Minimal profile shown next to bookings, offers and messages"""
    name: str
    image_url: Optional[str] = None
    city: Optional[str] = None


class ProfileCompleteness(BaseSchema):
    is_complete: bool = False
    missing_fields: list[str] = []


# HH:MM, 24h clock
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
