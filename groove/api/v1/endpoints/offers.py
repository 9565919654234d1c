"""
Direct offer endpoints
"""

from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.security import get_current_artist, get_current_user, get_current_venue
from groove.models.artist import Artist
from groove.models.user import User
from groove.models.venue import Venue
from groove.schemas.booking import BookingResponse
from groove.schemas.offer import (
    DirectOfferCreate,
    DirectOfferResponse,
    DirectOfferTermsUpdate,
    OfferStatusUpdate,
)
from groove.services.direct_offer_service import DirectOfferService

router = APIRouter()


@router.post("", response_model=DirectOfferResponse, status_code=status.HTTP_201_CREATED)
async def send_offer(
    offer_data: DirectOfferCreate,
    venue: Venue = Depends(get_current_venue),
    db: AsyncSession = Depends(get_session)
) -> Any:
    offer = await DirectOfferService(db).create_offer(venue.id, offer_data.model_dump())
    return offer.dict()


@router.get("/artist/me", response_model=List[DirectOfferResponse])
async def my_offers_as_artist(
    pending_only: bool = False,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    service = DirectOfferService(db)
    if pending_only:
        return await service.get_pending_offers_for_artist(artist.id)
    return await service.get_all_offers_for_artist(artist.id)


@router.get("/venue/me", response_model=List[DirectOfferResponse])
async def my_offers_as_venue(
    venue: Venue = Depends(get_current_venue),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await DirectOfferService(db).get_all_offers_for_venue(venue.id)


@router.patch("/{offer_id}/status", response_model=DirectOfferResponse)
async def update_offer_status(
    offer_id: UUID,
    status_update: OfferStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Decline, reopen or mark countered. Use /accept to accept.
    """
    offer = await DirectOfferService(db).update_offer_status(offer_id, status_update.status, current_user)
    return offer.dict()


@router.put("/{offer_id}/terms", response_model=DirectOfferResponse)
async def counter_offer(
    offer_id: UUID,
    terms: DirectOfferTermsUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    offer = await DirectOfferService(db).update_offer_terms(
        offer_id, terms.model_dump(exclude_unset=True), current_user
    )
    return offer.dict()


@router.post("/{offer_id}/accept", response_model=BookingResponse)
async def accept_offer(
    offer_id: UUID,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Accept an offer; creates the booking and blocks the date
    """
    return await DirectOfferService(db).accept_offer(offer_id, artist.id)
