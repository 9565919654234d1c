"""
Venue profiles
"""

from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import db_manager
from groove.core.exceptions import NotFoundError
from groove.models.venue import Venue, VenueStatus
from groove.services.profile_completeness_service import ProfileCompletenessService

logger = logging.getLogger(__name__)


class VenueService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all_venues(self, city: Optional[str] = None) -> List[Venue]:
        """
        Active venues with complete profiles
        """
        stmt = select(Venue).where(
            Venue.status == VenueStatus.ACTIVE,
            Venue.is_profile_complete.is_(True)
        )
        if city:
            stmt = stmt.where(func.lower(Venue.city) == city.strip().lower())
        result = await self.db.execute(stmt.order_by(Venue.name))
        return list(result.scalars().all())

    async def get_all_venues_for_admin(self) -> List[Venue]:
        result = await self.db.execute(select(Venue).order_by(Venue.name))
        return list(result.scalars().all())

    async def get_venue_by_id(self, venue_id: UUID) -> Venue:
        venue = await self.db.get(Venue, venue_id)
        if not venue:
            raise NotFoundError("Venue", venue_id)
        return venue

    async def update_venue(self, venue: Venue, updates: Dict[str, Any]) -> Venue:
        async with db_manager.transaction(self.db):
            for field, value in updates.items():
                setattr(venue, field, value)
            ProfileCompletenessService.refresh(venue, ProfileCompletenessService.check_venue)
        return venue
