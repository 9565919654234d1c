"""
Freelance musician endpoints
"""

from typing import Any, List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.security import get_current_musician
from groove.models.musician import Musician
from groove.schemas.musician import MusicianResponse, MusicianUpdate
from groove.services.musician_service import MusicianService

router = APIRouter()


@router.get("", response_model=List[MusicianResponse])
async def list_musicians(
    instrument: Optional[str] = Query(None, max_length=100),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await MusicianService(db).get_all_musicians(instrument)


@router.get("/me", response_model=MusicianResponse)
async def get_my_profile(musician: Musician = Depends(get_current_musician)) -> Any:
    return musician


@router.put("/me", response_model=MusicianResponse)
async def update_my_profile(
    updates: MusicianUpdate,
    musician: Musician = Depends(get_current_musician),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await MusicianService(db).update_musician(musician, updates.model_dump(exclude_unset=True))


@router.get("/{musician_id}", response_model=MusicianResponse)
async def get_musician(
    musician_id: UUID,
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await MusicianService(db).get_musician_by_id(musician_id)
