"""
Manual gig endpoints
"""

from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.security import get_current_artist
from groove.models.artist import Artist
from groove.schemas.manual_gig import ManualGigCreate, ManualGigResponse, ManualGigUpdate
from groove.schemas.response import MessageResponse
from groove.services.manual_gig_service import ManualGigService

router = APIRouter()


@router.get("", response_model=List[ManualGigResponse])
async def list_manual_gigs(
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await ManualGigService(db).get_manual_gigs(artist.id)


@router.post("", response_model=ManualGigResponse, status_code=status.HTTP_201_CREATED)
async def add_manual_gig(
    gig_data: ManualGigCreate,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Record an externally booked show. A paid show also logs pending income.
    """
    return await ManualGigService(db).add_manual_gig(gig_data.model_dump(), artist.id)


@router.get("/{gig_id}", response_model=ManualGigResponse)
async def get_manual_gig(
    gig_id: UUID,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await ManualGigService(db).get_manual_gig_by_id(gig_id, artist.id)


@router.put("/{gig_id}", response_model=ManualGigResponse)
async def update_manual_gig(
    gig_id: UUID,
    gig_data: ManualGigUpdate,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await ManualGigService(db).update_manual_gig(
        gig_id, gig_data.model_dump(exclude_unset=True), artist.id
    )


@router.delete("/{gig_id}", response_model=MessageResponse)
async def delete_manual_gig(
    gig_id: UUID,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    await ManualGigService(db).delete_manual_gig(gig_id, artist.id)
    return {"message": "Manual gig deleted"}
