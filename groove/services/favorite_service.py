"""
Favorites: venues bookmark artists, artists bookmark venues
"""

from typing import List
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import db_manager
from groove.models.artist import Artist
from groove.models.favorite import Favorite
from groove.models.venue import Venue


class FavoriteService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def is_favorite(self, user_id: UUID, profile_id: UUID) -> bool:
        result = await self.db.execute(
            select(Favorite.id).where(
                Favorite.user_id == user_id,
                Favorite.favorited_profile_id == profile_id
            )
        )
        return result.first() is not None

    async def add_favorite(self, user_id: UUID, profile_id: UUID) -> bool:
        """Idempotent"""
        if await self.is_favorite(user_id, profile_id):
            return True
        async with db_manager.transaction(self.db):
            self.db.add(Favorite(user_id=user_id, favorited_profile_id=profile_id))
        return True

    async def remove_favorite(self, user_id: UUID, profile_id: UUID) -> bool:
        async with db_manager.transaction(self.db):
            await self.db.execute(
                delete(Favorite).where(
                    Favorite.user_id == user_id,
                    Favorite.favorited_profile_id == profile_id
                )
            )
        return False

    async def _favorite_ids(self, user_id: UUID) -> List[UUID]:
        result = await self.db.execute(
            select(Favorite.favorited_profile_id).where(Favorite.user_id == user_id)
        )
        return list(result.scalars().all())

    async def get_enriched_favorites_for_venue(self, venue_id: UUID) -> List[Artist]:
        ids = await self._favorite_ids(venue_id)
        if not ids:
            return []
        result = await self.db.execute(select(Artist).where(Artist.id.in_(ids)).order_by(Artist.name))
        return list(result.scalars().all())

    async def get_enriched_favorites_for_artist(self, artist_id: UUID) -> List[Venue]:
        ids = await self._favorite_ids(artist_id)
        if not ids:
            return []
        result = await self.db.execute(select(Venue).where(Venue.id.in_(ids)).order_by(Venue.name))
        return list(result.scalars().all())
