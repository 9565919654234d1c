"""
Booking schemas
"""

from pydantic import Field, field_validator
from typing import Optional, List
from uuid import UUID
from datetime import date, datetime

from groove.config import settings
from groove.schemas.base import BaseSchema, IDSchema, TimestampSchema, TIME_PATTERN
from groove.models.booking import BookingStatus, PayoutStatus


class BookingCreate(BaseSchema):
    """Book one plan of an artist on one or more dates"""
    artist_id: UUID
    plan_id: int
    dates: List[date] = Field(..., min_length=1)
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)

    model_config = {
        "json_schema_extra": {
            "example": {
                "artist_id": "123e4567-e89b-12d3-a456-426614174000",
                "plan_id": 1,
                "dates": ["2026-11-20", "2026-11-21"]
            }
        }
    }

    @field_validator('dates')
    @classmethod
    def validate_dates(cls, v):
        if len(v) > settings.MAX_BOOKING_DATES:
            raise ValueError(f'Maximum {settings.MAX_BOOKING_DATES} dates per booking')
        if len(set(v)) != len(v):
            raise ValueError('Duplicate dates are not allowed')
        return v


class BookingResponse(IDSchema, TimestampSchema):
    """Booking as stored; the PIN is never part of this view"""
    artist_id: UUID
    venue_id: UUID
    plan_id: Optional[int] = None
    date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    payment: float
    status: BookingStatus
    payout_status: PayoutStatus
    artist_checked_in: bool
    check_in_time: Optional[datetime] = None


class VenueBookingResponse(BookingResponse):
    """Booking as seen by the venue that made it"""
    confirmation_pin: str


class EnrichedBookingResponse(BookingResponse):
    artist_name: Optional[str] = None
    venue_name: str
    plan_name: str
    plan_price: float
    confirmation_pin: Optional[str] = None


class CalendarEntry(BaseSchema):
    """Platform booking or manual gig on the artist's calendar"""
    id: UUID
    date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    title: str
    payment: float
    is_manual: bool
    venue_id: Optional[UUID] = None
    artist_checked_in: Optional[bool] = None


class CheckInRequest(BaseSchema):
    pin: str = Field(..., pattern=r"^\d{4}$")


class CheckInResponse(BaseSchema):
    booking_id: UUID
    artist_checked_in: bool
    check_in_time: datetime


class RevenueResponse(BaseSchema):
    artist_id: UUID
    window_days: int
    total: float


class BookedDatesResponse(BaseSchema):
    artist_id: UUID
    booked_dates: List[str]
