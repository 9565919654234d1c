"""
Artist profile endpoints
"""

from typing import Any, List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.security import get_current_artist, get_optional_user
from groove.models.artist import Artist
from groove.models.user import User, UserRole
from groove.schemas.artist import ArtistResponse, ArtistUpdate, GenreShowcaseItem
from groove.services.artist_service import ArtistService

router = APIRouter()


@router.get("", response_model=List[ArtistResponse])
async def list_artists(
    city: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Public catalogue: approved artists with complete profiles, featured first
    """
    return await ArtistService(db).get_all_artists(city=city)


@router.get("/featured", response_model=List[ArtistResponse])
async def featured_artists(
    limit: Optional[int] = Query(None, ge=1, le=50),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await ArtistService(db).get_featured_artists(limit)


@router.get("/genres", response_model=List[GenreShowcaseItem])
async def genre_showcase(db: AsyncSession = Depends(get_session)) -> Any:
    return await ArtistService(db).get_genres_with_images()


@router.get("/freelancers", response_model=List[ArtistResponse])
async def list_freelancers(
    instrument: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await ArtistService(db).get_freelancers(instrument)


@router.get("/me", response_model=ArtistResponse)
async def get_my_profile(artist: Artist = Depends(get_current_artist)) -> Any:
    return artist


@router.put("/me", response_model=ArtistResponse)
async def update_my_profile(
    updates: ArtistUpdate,
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Update own profile; completeness is recomputed
    """
    return await ArtistService(db).update_artist(artist, updates.model_dump(exclude_unset=True))


@router.get("/{artist_id}", response_model=ArtistResponse)
async def get_artist(
    artist_id: UUID,
    viewer: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Artist detail. A signed-in venue sees its special prices on the plans.
    """
    viewer_venue_id = viewer.id if viewer is not None and viewer.role == UserRole.VENUE else None
    return await ArtistService(db).get_artist_detail(artist_id, viewer_venue_id)
