"""
Support ticket schemas
"""

from pydantic import Field
from typing import Optional
from uuid import UUID
from datetime import date

from groove.schemas.base import BaseSchema, IDSchema, TimestampSchema
from groove.models.chat import SenderType
from groove.models.support_ticket import TicketStatus


class TicketCreate(BaseSchema):
    booking_id: UUID
    description: str = Field(..., min_length=10, max_length=5000)


class TicketStatusUpdate(BaseSchema):
    status: TicketStatus


class TicketResponse(IDSchema, TimestampSchema):
    booking_id: UUID
    reporter_id: UUID
    reporter_type: SenderType
    description: str
    status: TicketStatus


class EnrichedTicketResponse(TicketResponse):
    reporter_name: Optional[str] = None
    artist_name: Optional[str] = None
    venue_name: Optional[str] = None
    booking_date: Optional[date] = None
