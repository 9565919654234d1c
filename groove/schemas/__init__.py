"""
Pydantic schemas for request and response validation
"""

from groove.schemas.user import UserCreate, UserResponse, Token, TokenRefresh
from groove.schemas.booking import (
    BookingCreate,
    BookingResponse,
    EnrichedBookingResponse,
    CalendarEntry,
    CheckInRequest,
    CheckInResponse
)
from groove.schemas.response import MessageResponse

__all__ = [
    "UserCreate",
    "UserResponse",
    "Token",
    "TokenRefresh",
    "BookingCreate",
    "BookingResponse",
    "EnrichedBookingResponse",
    "CalendarEntry",
    "CheckInRequest",
    "CheckInResponse",
    "MessageResponse"
]
