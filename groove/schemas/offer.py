"""
Direct offer and open gig schemas
"""

import datetime
from pydantic import Field
from typing import Optional, Literal
from uuid import UUID
from datetime import date

from groove.schemas.base import BaseSchema, IDSchema, TimestampSchema, ProfileSummary, TIME_PATTERN
from groove.models.offer import OfferStatus, GigStatus


class DirectOfferCreate(BaseSchema):
    artist_id: UUID
    date: date
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    payment: float = Field(..., ge=0)
    message: Optional[str] = Field(None, max_length=2000)


class DirectOfferTermsUpdate(BaseSchema):
    """Counter-proposal; the offer becomes 'countered'"""
    date: Optional[datetime.date] = None
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    payment: Optional[float] = Field(None, ge=0)
    message: Optional[str] = Field(None, max_length=2000)


class OfferStatusUpdate(BaseSchema):
    status: Literal["pending", "declined", "countered"]


class DirectOfferResponse(IDSchema, TimestampSchema):
    venue_id: UUID
    artist_id: UUID
    date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    payment: float
    message: Optional[str] = None
    status: OfferStatus
    artist: Optional[ProfileSummary] = None
    venue: Optional[ProfileSummary] = None


class GigOfferCreate(BaseSchema):
    date: date
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    payment: float = Field(..., ge=0)
    notes: Optional[str] = Field(None, max_length=2000)
    genre: Optional[str] = Field(None, max_length=100)


class GigOfferResponse(IDSchema, TimestampSchema):
    venue_id: UUID
    date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    payment: float
    notes: Optional[str] = None
    genre: Optional[str] = None
    status: GigStatus
    booked_by_artist_id: Optional[UUID] = None
    venue: Optional[ProfileSummary] = None
    booked_by: Optional[ProfileSummary] = None
