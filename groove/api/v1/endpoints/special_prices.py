"""
Per-venue plan price endpoints
"""

from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.exceptions import NotFoundError
from groove.core.security import get_current_artist, get_current_venue
from groove.models.artist import Artist
from groove.models.venue import Venue
from groove.schemas.artist import Plan
from groove.schemas.response import MessageResponse
from groove.schemas.special_price import SpecialPriceResponse, SpecialPricesSet
from groove.services.special_price_service import SpecialPriceService

router = APIRouter()


@router.get("/artist/me", response_model=List[SpecialPriceResponse])
async def my_special_prices(
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await SpecialPriceService(db).get_special_prices_for_artist(artist.id)


@router.put("/artist/me", response_model=List[SpecialPriceResponse])
async def set_special_prices(
    prices: SpecialPricesSet,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Grant a venue special prices on some of the artist's plans
    """
    return await SpecialPriceService(db).set_special_prices_for_venue(
        artist,
        prices.venue_id,
        [item.model_dump() for item in prices.prices]
    )


@router.delete("/artist/me/{venue_id}", response_model=MessageResponse)
async def delete_special_prices(
    venue_id: UUID,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    removed = await SpecialPriceService(db).delete_special_prices_for_venue(artist.id, venue_id)
    return {"message": f"{removed} special price(s) removed"}


@router.get("/venue/me/{artist_id}", response_model=List[Plan])
async def plans_for_my_venue(
    artist_id: UUID,
    venue: Venue = Depends(get_current_venue),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    The artist's plans with this venue's special prices applied
    """
    artist = await db.get(Artist, artist_id)
    if not artist:
        raise NotFoundError("Artist", artist_id)
    return await SpecialPriceService(db).apply_to_plans(artist, venue.id)
