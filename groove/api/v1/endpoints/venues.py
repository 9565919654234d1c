"""
Venue profile endpoints
"""

from typing import Any, List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.security import get_current_venue
from groove.models.venue import Venue
from groove.schemas.venue import VenueResponse, VenueUpdate
from groove.services.venue_service import VenueService

router = APIRouter()


@router.get("", response_model=List[VenueResponse])
async def list_venues(
    city: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Active venues with complete profiles
    """
    return await VenueService(db).get_all_venues(city=city)


@router.get("/me", response_model=VenueResponse)
async def get_my_venue(venue: Venue = Depends(get_current_venue)) -> Any:
    return venue


@router.put("/me", response_model=VenueResponse)
async def update_my_venue(
    updates: VenueUpdate,
    venue: Venue = Depends(get_current_venue),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await VenueService(db).update_venue(venue, updates.model_dump(exclude_unset=True))


@router.get("/{venue_id}", response_model=VenueResponse)
async def get_venue(
    venue_id: UUID,
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await VenueService(db).get_venue_by_id(venue_id)
