"""
Open gig endpoints
"""

from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.redis import RedisManager, get_redis_manager
from groove.core.security import get_current_artist, get_current_user, get_current_venue
from groove.models.artist import Artist
from groove.models.user import User
from groove.models.venue import Venue
from groove.schemas.booking import BookingResponse
from groove.schemas.offer import GigOfferCreate, GigOfferResponse
from groove.schemas.response import MessageResponse
from groove.services.gig_service import GigService
from groove.services.realtime_service import RealtimePublisher

router = APIRouter()


@router.get("", response_model=List[GigOfferResponse])
async def list_open_gigs(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await GigService(db).get_all_open_gigs()


@router.get("/venue/me", response_model=List[GigOfferResponse])
async def my_gigs(
    venue: Venue = Depends(get_current_venue),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await GigService(db).get_gigs_for_venue(venue.id)


@router.post("", response_model=GigOfferResponse, status_code=status.HTTP_201_CREATED)
async def publish_gig(
    gig_data: GigOfferCreate,
    venue: Venue = Depends(get_current_venue),
    db: AsyncSession = Depends(get_session),
    redis_manager: RedisManager = Depends(get_redis_manager)
) -> Any:
    """
    Publish an open gig. Artists whose genres match are notified.
    """
    gig = await GigService(db, RealtimePublisher(redis_manager)).add_gig(venue.id, gig_data.model_dump())
    return gig.dict()


@router.post("/{gig_id}/book", response_model=BookingResponse)
async def book_gig(
    gig_id: UUID,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await GigService(db).book_gig(gig_id, artist.id)


@router.delete("/{gig_id}", response_model=MessageResponse)
async def delete_gig(
    gig_id: UUID,
    venue: Venue = Depends(get_current_venue),
    db: AsyncSession = Depends(get_session)
) -> Any:
    await GigService(db).delete_gig(gig_id, venue.id)
    return {"message": "Gig deleted"}
