"""
Booking endpoints: reservations, calendars and artist check-in
"""

from typing import Any, List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from groove.config import settings
from groove.core.database import get_session
from groove.core.security import get_current_artist, get_current_user, get_current_venue
from groove.models.artist import Artist
from groove.models.user import User
from groove.models.venue import Venue
from groove.schemas.booking import (
    BookedDatesResponse,
    BookingCreate,
    CalendarEntry,
    CheckInRequest,
    CheckInResponse,
    EnrichedBookingResponse,
    RevenueResponse,
    VenueBookingResponse,
)
from groove.services.booking_service import BookingService

router = APIRouter()


@router.post("", response_model=List[VenueBookingResponse], status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: BookingCreate,
    venue: Venue = Depends(get_current_venue),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Book an artist's plan on one or more dates. Returns one booking per
    date, each with the PIN the venue hands to the artist on the night.
    """
    return await BookingService(db).create_booking(
        artist_id=booking_data.artist_id,
        venue_id=venue.id,
        plan_id=booking_data.plan_id,
        dates=booking_data.dates,
        start_time=booking_data.start_time,
        end_time=booking_data.end_time
    )


@router.get("/artist/me", response_model=List[EnrichedBookingResponse])
async def my_artist_bookings(
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await BookingService(db).get_enriched_bookings_for_artist(artist.id)


@router.get("/artist/me/calendar", response_model=List[CalendarEntry])
async def my_calendar(
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Platform bookings and manual gigs, by date
    """
    return await BookingService(db).get_bookings_for_artist(artist.id)


@router.get("/artist/me/revenue", response_model=RevenueResponse)
async def my_revenue(
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    total = await BookingService(db).get_artist_revenue_last_30_days(artist.id)
    return {
        "artist_id": artist.id,
        "window_days": settings.ARTIST_REVENUE_WINDOW_DAYS,
        "total": total
    }


@router.post("/artist/me/sync-dates", response_model=BookedDatesResponse)
async def sync_my_booked_dates(
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    booked_dates = await BookingService(db).sync_booked_dates(artist.id)
    return {"artist_id": artist.id, "booked_dates": booked_dates}


@router.get("/venue/me", response_model=List[EnrichedBookingResponse])
async def my_venue_bookings(
    venue: Venue = Depends(get_current_venue),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await BookingService(db).get_bookings_for_venue(venue.id)


@router.get("/venue/me/today", response_model=Optional[EnrichedBookingResponse])
async def my_booking_today(
    venue: Venue = Depends(get_current_venue),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Tonight's booking, if any, with the check-in PIN
    """
    return await BookingService(db).get_todays_booking_for_venue(venue.id)


@router.get("/{booking_id}", response_model=EnrichedBookingResponse)
async def get_booking(
    booking_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await BookingService(db).get_enriched_booking_by_id(booking_id, current_user)


@router.post("/{booking_id}/check-in", response_model=CheckInResponse)
async def confirm_presence(
    booking_id: UUID,
    check_in: CheckInRequest,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Artist confirms presence at the venue with the 4-digit PIN
    """
    booking = await BookingService(db).confirm_artist_presence(booking_id, check_in.pin, artist.id)
    return {
        "booking_id": booking.id,
        "artist_checked_in": booking.artist_checked_in,
        "check_in_time": booking.check_in_time
    }
