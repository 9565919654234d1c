"""
Open gigs: public slots a venue publishes for any artist to take
"""

from typing import Any, Dict, List
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import db_manager
from groove.core.exceptions import AuthorizationError, BookingError, DatesUnavailableError, NotFoundError
from groove.models.artist import Artist, ArtistStatus
from groove.models.booking import Booking, BookingStatus, PayoutStatus
from groove.models.offer import GigOffer, GigStatus
from groove.models.venue import Venue
from groove.services.booking_service import add_booked_dates, generate_confirmation_pin, lock_artist
from groove.services.realtime_service import RealtimePublisher

logger = logging.getLogger(__name__)


def artist_matches_genre(artist: Artist, genre: str) -> bool:
    """
    Substring match of the gig genre against the artist's primary and
    secondary genres, case-insensitive
    """
    wanted = (genre or "").strip().lower()
    if not wanted:
        return False
    genres = artist.genre or {}
    if wanted in (genres.get("primary") or "").lower():
        return True
    return any(wanted in (g or "").lower() for g in genres.get("secondary") or [])


class GigService:

    def __init__(self, db: AsyncSession, publisher: RealtimePublisher = None):
        self.db = db
        self.publisher = publisher or RealtimePublisher(None)

    async def get_all_open_gigs(self) -> List[Dict[str, Any]]:
        result = await self.db.execute(
            select(GigOffer, Venue)
            .outerjoin(Venue, Venue.id == GigOffer.venue_id)
            .where(GigOffer.status == GigStatus.OPEN)
            .order_by(GigOffer.date)
        )
        gigs = []
        for gig, venue in result.all():
            data = gig.dict()
            data["venue"] = venue
            gigs.append(data)
        return gigs

    async def get_gigs_for_venue(self, venue_id: UUID) -> List[Dict[str, Any]]:
        result = await self.db.execute(
            select(GigOffer, Artist)
            .outerjoin(Artist, Artist.id == GigOffer.booked_by_artist_id)
            .where(GigOffer.venue_id == venue_id)
            .order_by(GigOffer.date)
        )
        gigs = []
        for gig, artist in result.all():
            data = gig.dict()
            data["booked_by"] = artist
            gigs.append(data)
        return gigs

    async def find_matching_artists(self, genre: str) -> List[Artist]:
        if not genre:
            return []
        result = await self.db.execute(
            select(Artist).where(
                Artist.status == ArtistStatus.APPROVED,
                Artist.is_profile_complete.is_(True)
            )
        )
        return [artist for artist in result.scalars().all() if artist_matches_genre(artist, genre)]

    async def add_gig(self, venue_id: UUID, payload: Dict[str, Any]) -> GigOffer:
        """
        Publish an open gig and notify artists whose genres match
        """
        async with db_manager.transaction(self.db):
            gig = GigOffer(venue_id=venue_id, status=GigStatus.OPEN, **payload)
            self.db.add(gig)
            await self.db.flush()

        artists = await self.find_matching_artists(gig.genre)
        if artists:
            logger.info(f"Notifying {len(artists)} artist(s) about gig {gig.id}")
            await self.publisher.gig_opened(gig.id, [artist.id for artist in artists])
        return gig

    async def book_gig(self, gig_id: UUID, artist_id: UUID) -> Booking:
        """
        Take an open gig: the gig becomes booked, the date is blocked and a
        booking with its own PIN is created
        """
        async with db_manager.transaction(self.db):
            gig = await self.db.get(GigOffer, gig_id, with_for_update=True, populate_existing=True)
            if not gig:
                raise NotFoundError("Gig", gig_id)
            if gig.status != GigStatus.OPEN:
                raise BookingError("Gig is no longer open", code="GIG_NOT_OPEN", status_code=409)

            artist = await lock_artist(self.db, artist_id)
            day = gig.date.isoformat()
            if day in (artist.booked_dates or []):
                raise DatesUnavailableError([day])

            gig.status = GigStatus.BOOKED
            gig.booked_by_artist_id = artist_id
            add_booked_dates(artist, [day])
            booking = Booking(
                artist_id=artist_id,
                venue_id=gig.venue_id,
                plan_id=None,
                date=gig.date,
                start_time=gig.start_time,
                end_time=gig.end_time,
                payment=gig.payment,
                status=BookingStatus.PENDING,
                payout_status=PayoutStatus.PENDING,
                confirmation_pin=generate_confirmation_pin(),
                artist_checked_in=False,
            )
            self.db.add(booking)
            await self.db.flush()

        logger.info(f"Gig {gig_id} booked by artist {artist_id}")
        return booking

    async def delete_gig(self, gig_id: UUID, venue_id: UUID) -> None:
        gig = await self.db.get(GigOffer, gig_id)
        if not gig:
            raise NotFoundError("Gig", gig_id)
        if gig.venue_id != venue_id:
            raise AuthorizationError("Gig belongs to another venue")

        async with db_manager.transaction(self.db):
            await self.db.delete(gig)
