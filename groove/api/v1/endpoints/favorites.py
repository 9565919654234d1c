"""
Favorite endpoints: venues favorite artists, artists favorite venues
"""

from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.exceptions import AuthorizationError
from groove.core.security import get_current_user
from groove.models.user import User, UserRole
from groove.schemas.base import ProfileSummary
from groove.schemas.favorite import FavoriteStatus
from groove.services.favorite_service import FavoriteService

router = APIRouter()


@router.get("", response_model=List[ProfileSummary])
async def my_favorites(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    service = FavoriteService(db)
    if current_user.role == UserRole.VENUE:
        return await service.get_enriched_favorites_for_venue(current_user.id)
    if current_user.role == UserRole.ARTIST:
        return await service.get_enriched_favorites_for_artist(current_user.id)
    raise AuthorizationError("Only artists and venues keep favorites")


@router.get("/{profile_id}", response_model=FavoriteStatus)
async def is_favorite(
    profile_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    favorite = await FavoriteService(db).is_favorite(current_user.id, profile_id)
    return {"favorited_profile_id": profile_id, "is_favorite": favorite}


@router.post("/{profile_id}", response_model=FavoriteStatus)
async def add_favorite(
    profile_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    favorite = await FavoriteService(db).add_favorite(current_user.id, profile_id)
    return {"favorited_profile_id": profile_id, "is_favorite": favorite}


@router.delete("/{profile_id}", response_model=FavoriteStatus)
async def remove_favorite(
    profile_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    favorite = await FavoriteService(db).remove_favorite(current_user.id, profile_id)
    return {"favorited_profile_id": profile_id, "is_favorite": favorite}
