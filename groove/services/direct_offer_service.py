"""
Direct offers: a venue's proposal addressed to one artist
"""

from decimal import Decimal
from typing import Any, Dict, List
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import db_manager
from groove.core.exceptions import (
    AuthorizationError,
    BookingError,
    DatesUnavailableError,
    NotFoundError,
)
from groove.models.artist import Artist
from groove.models.booking import Booking, BookingStatus, PayoutStatus
from groove.models.offer import DirectOffer, OfferStatus
from groove.models.user import User
from groove.models.venue import Venue
from groove.services.booking_service import add_booked_dates, generate_confirmation_pin, lock_artist

logger = logging.getLogger(__name__)

OPEN_OFFER_STATUSES = (OfferStatus.PENDING, OfferStatus.COUNTERED)


def _with_profiles(offer: DirectOffer, artist=None, venue=None) -> Dict[str, Any]:
    data = offer.dict()
    data["artist"] = artist
    data["venue"] = venue
    return data


class DirectOfferService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_offer(self, venue_id: UUID, payload: Dict[str, Any]) -> DirectOffer:
        if not await self.db.get(Artist, payload["artist_id"]):
            raise NotFoundError("Artist", payload["artist_id"])

        async with db_manager.transaction(self.db):
            offer = DirectOffer(
                venue_id=venue_id,
                status=OfferStatus.PENDING,
                **payload
            )
            self.db.add(offer)
            await self.db.flush()

        logger.info(f"Direct offer {offer.id} sent from venue {venue_id} to artist {offer.artist_id}")
        return offer

    async def _get_offer(self, offer_id: UUID) -> DirectOffer:
        offer = await self.db.get(DirectOffer, offer_id)
        if not offer:
            raise NotFoundError("Offer", offer_id)
        return offer

    async def _offers_for_artist(self, artist_id: UUID, *criteria) -> List[Dict[str, Any]]:
        result = await self.db.execute(
            select(DirectOffer, Venue)
            .join(Venue, Venue.id == DirectOffer.venue_id)
            .where(DirectOffer.artist_id == artist_id, *criteria)
            .order_by(DirectOffer.date.desc())
        )
        return [_with_profiles(offer, venue=venue) for offer, venue in result.all()]

    async def get_pending_offers_for_artist(self, artist_id: UUID) -> List[Dict[str, Any]]:
        return await self._offers_for_artist(artist_id, DirectOffer.status == OfferStatus.PENDING)

    async def get_all_offers_for_artist(self, artist_id: UUID) -> List[Dict[str, Any]]:
        return await self._offers_for_artist(artist_id)

    async def get_all_offers_for_venue(self, venue_id: UUID) -> List[Dict[str, Any]]:
        result = await self.db.execute(
            select(DirectOffer, Artist)
            .join(Artist, Artist.id == DirectOffer.artist_id)
            .where(DirectOffer.venue_id == venue_id)
            .order_by(DirectOffer.date.desc())
        )
        return [_with_profiles(offer, artist=artist) for offer, artist in result.all()]

    def _check_participant(self, offer: DirectOffer, user: User):
        if user.id not in (offer.artist_id, offer.venue_id):
            raise AuthorizationError("Not a participant of this offer")

    async def update_offer_status(self, offer_id: UUID, status: OfferStatus, user: User) -> DirectOffer:
        """
        Decline, reopen or mark countered. Acceptance goes through accept_offer.
        """
        offer = await self._get_offer(offer_id)
        self._check_participant(offer, user)
        if offer.status == OfferStatus.ACCEPTED:
            raise BookingError("Offer was already accepted", code="OFFER_CLOSED", status_code=409)

        async with db_manager.transaction(self.db):
            offer.status = OfferStatus(status)
        return offer

    async def update_offer_terms(self, offer_id: UUID, terms: Dict[str, Any], user: User) -> DirectOffer:
        """
        Counter-proposal from either side
        """
        offer = await self._get_offer(offer_id)
        self._check_participant(offer, user)
        if offer.status not in OPEN_OFFER_STATUSES:
            raise BookingError(f"Cannot change terms of a {offer.status.value} offer", code="OFFER_CLOSED", status_code=409)

        async with db_manager.transaction(self.db):
            for field, value in terms.items():
                if field == "payment":
                    value = Decimal(str(value))
                setattr(offer, field, value)
            offer.status = OfferStatus.COUNTERED
        return offer

    async def accept_offer(self, offer_id: UUID, artist_id: UUID) -> Booking:
        """
        Accept: mark the offer, block the date and create the booking,
        all in one transaction
        """
        async with db_manager.transaction(self.db):
            offer = await self.db.get(DirectOffer, offer_id, with_for_update=True, populate_existing=True)
            if not offer:
                raise NotFoundError("Offer", offer_id)
            if offer.artist_id != artist_id:
                raise AuthorizationError("Offer is addressed to another artist")
            if offer.status not in OPEN_OFFER_STATUSES:
                raise BookingError(f"Offer is already {offer.status.value}", code="OFFER_CLOSED", status_code=409)

            artist = await lock_artist(self.db, artist_id)
            day = offer.date.isoformat()
            if day in (artist.booked_dates or []):
                raise DatesUnavailableError([day])

            offer.status = OfferStatus.ACCEPTED
            add_booked_dates(artist, [day])
            booking = Booking(
                artist_id=artist_id,
                venue_id=offer.venue_id,
                plan_id=None,
                date=offer.date,
                start_time=offer.start_time,
                end_time=offer.end_time,
                payment=offer.payment,
                status=BookingStatus.PENDING,
                payout_status=PayoutStatus.PENDING,
                confirmation_pin=generate_confirmation_pin(),
                artist_checked_in=False,
            )
            self.db.add(booking)
            await self.db.flush()

        logger.info(f"Offer {offer_id} accepted by artist {artist_id}; booking {booking.id} created")
        return booking
