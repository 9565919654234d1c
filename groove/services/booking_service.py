"""
Booking service

Bookings are one row per reserved date. The artist's calendar is also kept as
a denormalized list of YYYY-MM-DD strings (`Artist.booked_dates`) that every
booking, offer, gig and manual-gig write updates while holding the artist row
lock.
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID
import logging
import secrets

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from groove.config import settings
from groove.core.database import db_manager
from groove.core.exceptions import (
    AlreadyCheckedInError,
    AuthorizationError,
    BookingError,
    DatesUnavailableError,
    InvalidPinError,
    NotFoundError,
)
from groove.core.logging import get_logger
from groove.models.artist import Artist, ArtistStatus
from groove.models.booking import Booking, BookingStatus, ManualGig, PayoutStatus
from groove.models.user import User, UserRole
from groove.models.venue import Venue
from groove.services.special_price_service import SpecialPriceService

logger = logging.getLogger(__name__)

UNKNOWN_VENUE = "Unknown venue"
UNKNOWN_ARTIST = "Unknown artist"
DIRECT_OFFER_PLAN = "Direct offer"


def generate_confirmation_pin() -> str:
    """Random 4-digit check-in code (1000-9999)"""
    return str(1000 + secrets.randbelow(9000))


def today() -> date:
    return datetime.now(timezone.utc).date()


def add_booked_dates(artist: Artist, dates: Iterable[str]) -> List[str]:
    """Union dates into the artist's calendar. Assigns a new list so the JSON column is flagged dirty."""
    merged = sorted(set(artist.booked_dates or []) | set(dates))
    artist.booked_dates = merged
    return merged


def remove_booked_dates(artist: Artist, dates: Iterable[str]) -> List[str]:
    drop = set(dates)
    remaining = [d for d in (artist.booked_dates or []) if d not in drop]
    artist.booked_dates = remaining
    return remaining


async def lock_artist(db: AsyncSession, artist_id: UUID) -> Artist:
    """
    Load an artist with a row lock for booked-date updates.
    SELECT ... FOR UPDATE where the dialect supports it.
    """
    result = await db.execute(
        select(Artist).where(Artist.id == artist_id).with_for_update()
    )
    artist = result.scalar_one_or_none()
    if not artist:
        raise NotFoundError("Artist", artist_id)
    return artist


async def date_is_occupied(db: AsyncSession, artist_id: UUID, day: date, exclude_gig_id: Optional[UUID] = None) -> bool:
    """True when a booking or another manual gig still sits on this date"""
    booking = await db.execute(
        select(Booking.id).where(Booking.artist_id == artist_id, Booking.date == day).limit(1)
    )
    if booking.first() is not None:
        return True

    stmt = select(ManualGig.id).where(ManualGig.artist_id == artist_id, ManualGig.date == day)
    if exclude_gig_id is not None:
        stmt = stmt.where(ManualGig.id != exclude_gig_id)
    gig = await db.execute(stmt.limit(1))
    return gig.first() is not None


def enrich_booking(
    booking: Booking,
    artist: Optional[Artist],
    venue_name: Optional[str],
    include_pin: bool = False
) -> Dict[str, Any]:
    data = booking.dict()
    plan = artist.find_plan(booking.plan_id) if artist else None

    data["artist_name"] = artist.name if artist else UNKNOWN_ARTIST
    data["venue_name"] = venue_name or UNKNOWN_VENUE
    data["plan_name"] = plan["name"] if plan else DIRECT_OFFER_PLAN
    data["plan_price"] = plan["price"] if plan else booking.payment
    if not include_pin:
        data.pop("confirmation_pin", None)
    return data


class BookingService:
    """
    Booking management
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_booking(
        self,
        artist_id: UUID,
        venue_id: UUID,
        plan_id: int,
        dates: List[date],
        start_time: Optional[str] = None,
        end_time: Optional[str] = None
    ) -> List[Booking]:
        """
        Book a plan on one or more dates: one paid booking per date, each with
        its own PIN, and the dates added to the artist's calendar.
        """
        date_strings = [d.isoformat() for d in dates]
        if len(set(date_strings)) != len(date_strings):
            raise BookingError("Duplicate dates are not allowed", code="DUPLICATE_DATES")

        async with db_manager.transaction(self.db):
            venue = await self.db.get(Venue, venue_id)
            if not venue:
                raise NotFoundError("Venue", venue_id)

            artist = await lock_artist(self.db, artist_id)
            if artist.status == ArtistStatus.BLOCKED:
                raise BookingError("Artist is not available for booking", code="ARTIST_UNAVAILABLE")

            plan = artist.find_plan(plan_id)
            if not plan:
                raise NotFoundError("Plan", plan_id)

            taken = sorted(set(date_strings) & set(artist.booked_dates or []))
            if taken:
                raise DatesUnavailableError(taken)

            price = await SpecialPriceService(self.db).price_for_plan(artist, venue_id, plan)

            bookings = [
                Booking(
                    artist_id=artist.id,
                    venue_id=venue_id,
                    plan_id=plan_id,
                    date=day,
                    start_time=start_time,
                    end_time=end_time,
                    payment=price,
                    status=BookingStatus.PAID,
                    payout_status=PayoutStatus.PENDING,
                    confirmation_pin=generate_confirmation_pin(),
                    artist_checked_in=False,
                )
                for day in dates
            ]
            self.db.add_all(bookings)
            add_booked_dates(artist, date_strings)
            await self.db.flush()

        logger.info(
            f"Created {len(bookings)} booking(s) for artist {artist_id} by venue {venue_id} on {', '.join(date_strings)}"
        )
        return bookings

    async def get_enriched_bookings_for_artist(self, artist_id: UUID) -> List[Dict[str, Any]]:
        """
        Artist's bookings with venue and plan names filled in
        """
        artist = await self.db.get(Artist, artist_id)
        if not artist:
            raise NotFoundError("Artist", artist_id)

        result = await self.db.execute(
            select(Booking, Venue.name)
            .outerjoin(Venue, Venue.id == Booking.venue_id)
            .where(Booking.artist_id == artist_id)
            .order_by(Booking.date.desc())
        )
        return [
            enrich_booking(booking, artist, venue_name)
            for booking, venue_name in result.all()
        ]

    async def get_bookings_for_artist(self, artist_id: UUID) -> List[Dict[str, Any]]:
        """
        Calendar view: platform bookings merged with manual gigs, by date
        """
        bookings = await self.db.execute(
            select(Booking, Venue.name)
            .outerjoin(Venue, Venue.id == Booking.venue_id)
            .where(Booking.artist_id == artist_id)
        )
        gigs = await self.db.execute(
            select(ManualGig).where(ManualGig.artist_id == artist_id)
        )

        entries = [
            {
                "id": booking.id,
                "date": booking.date,
                "start_time": booking.start_time,
                "end_time": booking.end_time,
                "title": venue_name or UNKNOWN_VENUE,
                "payment": booking.payment,
                "is_manual": False,
                "venue_id": booking.venue_id,
                "artist_checked_in": booking.artist_checked_in,
            }
            for booking, venue_name in bookings.all()
        ]
        entries.extend(
            {
                "id": gig.id,
                "date": gig.date,
                "start_time": gig.start_time,
                "end_time": gig.end_time,
                "title": gig.event_name,
                "payment": gig.payment,
                "is_manual": True,
            }
            for gig in gigs.scalars().all()
        )
        entries.sort(key=lambda entry: (entry["date"], entry["start_time"] or ""))
        return entries

    async def _venue_bookings(self, venue_id: UUID, *criteria) -> List[Dict[str, Any]]:
        venue = await self.db.get(Venue, venue_id)
        venue_name = venue.name if venue else None

        result = await self.db.execute(
            select(Booking, Artist)
            .outerjoin(Artist, Artist.id == Booking.artist_id)
            .where(Booking.venue_id == venue_id, *criteria)
            .order_by(Booking.date.desc())
        )
        return [
            enrich_booking(booking, artist, venue_name, include_pin=True)
            for booking, artist in result.all()
        ]

    async def get_bookings_for_venue(self, venue_id: UUID) -> List[Dict[str, Any]]:
        """
        Venue's bookings, PIN included
        """
        return await self._venue_bookings(venue_id)

    async def get_todays_booking_for_venue(self, venue_id: UUID) -> Optional[Dict[str, Any]]:
        bookings = await self._venue_bookings(venue_id, Booking.date == today())
        return bookings[0] if bookings else None

    async def get_enriched_booking_by_id(self, booking_id: UUID, viewer: User) -> Dict[str, Any]:
        """
        Single booking for its artist, its venue or an admin.
        Only the venue and admins see the confirmation PIN.
        """
        booking = await self.db.get(Booking, booking_id)
        if not booking:
            raise NotFoundError("Booking", booking_id)

        is_admin = viewer.role == UserRole.ADMIN
        is_venue = viewer.id == booking.venue_id
        if not (is_admin or is_venue or viewer.id == booking.artist_id):
            raise AuthorizationError("Not a participant of this booking")

        artist = await self.db.get(Artist, booking.artist_id)
        venue = await self.db.get(Venue, booking.venue_id)
        return enrich_booking(
            booking,
            artist,
            venue.name if venue else None,
            include_pin=is_admin or is_venue
        )

    async def confirm_artist_presence(self, booking_id: UUID, pin: str, artist_id: UUID) -> Booking:
        """
        Check-in: the booked artist submits the venue's 4-digit code.
        The code is compared verbatim; a mismatch never sets the flag.
        """
        log = get_logger(__name__, booking_id=str(booking_id), artist_id=str(artist_id))

        async with db_manager.transaction(self.db):
            booking = await self.db.get(Booking, booking_id, with_for_update=True, populate_existing=True)
            if not booking:
                raise NotFoundError("Booking", booking_id)

            if booking.artist_id != artist_id:
                log.warning("Check-in attempted by an artist who is not on the booking")
                raise AuthorizationError("Only the booked artist can confirm presence")

            if booking.artist_checked_in:
                raise AlreadyCheckedInError(str(booking_id))

            if pin != booking.confirmation_pin:
                log.warning("Check-in rejected: invalid confirmation code")
                raise InvalidPinError(str(booking_id))

            booking.artist_checked_in = True
            booking.check_in_time = datetime.now(timezone.utc)

        log.info("Artist presence confirmed")
        return booking

    async def get_artist_revenue_last_30_days(self, artist_id: UUID) -> float:
        """
        Sum of plan prices for paid-out bookings inside the revenue window.
        Bookings without a plan count their agreed payment.
        """
        artist = await self.db.get(Artist, artist_id)
        if not artist:
            raise NotFoundError("Artist", artist_id)

        since = today() - timedelta(days=settings.ARTIST_REVENUE_WINDOW_DAYS)
        result = await self.db.execute(
            select(Booking).where(
                Booking.artist_id == artist_id,
                Booking.payout_status == PayoutStatus.PAID,
                Booking.date >= since,
            )
        )

        total = Decimal("0")
        for booking in result.scalars().all():
            plan = artist.find_plan(booking.plan_id)
            total += Decimal(str(plan["price"])) if plan else Decimal(booking.payment or 0)
        return float(total)

    async def sync_booked_dates(self, artist_id: UUID) -> List[str]:
        """
        Rebuild the artist's calendar from bookings and manual gigs
        """
        async with db_manager.transaction(self.db):
            artist = await lock_artist(self.db, artist_id)
            booking_dates = await self.db.execute(
                select(Booking.date).where(Booking.artist_id == artist_id).distinct()
            )
            gig_dates = await self.db.execute(
                select(ManualGig.date).where(ManualGig.artist_id == artist_id).distinct()
            )
            dates = {d.isoformat() for d in booking_dates.scalars().all()}
            dates.update(d.isoformat() for d in gig_dates.scalars().all())

            previous = set(artist.booked_dates or [])
            artist.booked_dates = sorted(dates)

        if previous != dates:
            logger.warning(
                f"Booked dates for artist {artist_id} were out of sync: "
                f"added {sorted(dates - previous)}, removed {sorted(previous - dates)}"
            )
        return artist.booked_dates
