"""
Freelance musician profiles
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import db_manager
from groove.core.exceptions import NotFoundError
from groove.models.artist import ArtistStatus
from groove.models.musician import Musician
from groove.services.profile_completeness_service import ProfileCompletenessService


class MusicianService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all_musicians(self, instrument: Optional[str] = None) -> List[Musician]:
        stmt = select(Musician).where(
            Musician.status == ArtistStatus.APPROVED,
            Musician.is_profile_complete.is_(True)
        )
        if instrument:
            stmt = stmt.where(func.lower(Musician.instrument) == instrument.strip().lower())
        result = await self.db.execute(stmt.order_by(Musician.name))
        return list(result.scalars().all())

    async def get_all_musicians_for_admin(self) -> List[Musician]:
        result = await self.db.execute(select(Musician).order_by(Musician.name))
        return list(result.scalars().all())

    async def get_musician_by_id(self, musician_id: UUID) -> Musician:
        musician = await self.db.get(Musician, musician_id)
        if not musician:
            raise NotFoundError("Musician", musician_id)
        return musician

    async def update_musician(self, musician: Musician, updates: Dict[str, Any]) -> Musician:
        async with db_manager.transaction(self.db):
            for field, value in updates.items():
                setattr(musician, field, value)
            ProfileCompletenessService.refresh(musician, ProfileCompletenessService.check_musician)
        return musician
