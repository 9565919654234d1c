"""
Manual gig schemas
"""

from pydantic import Field
from typing import Optional
from uuid import UUID
import datetime
from datetime import date

from groove.schemas.base import BaseSchema, IDSchema, TimestampSchema, TIME_PATTERN


class ManualGigCreate(BaseSchema):
    event_name: str = Field(..., min_length=1, max_length=255)
    date: date
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    payment: float = Field(0, ge=0)


class ManualGigUpdate(BaseSchema):
    event_name: Optional[str] = Field(None, min_length=1, max_length=255)
    date: Optional[datetime.date] = None
    start_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    end_time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    payment: Optional[float] = Field(None, ge=0)


class ManualGigResponse(IDSchema, TimestampSchema):
    artist_id: UUID
    event_name: str
    date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    payment: float
