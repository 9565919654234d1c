"""
Artist profiles: public listings, detail and profile editing
"""

from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from groove.config import settings
from groove.core.database import db_manager
from groove.core.exceptions import NotFoundError
from groove.models.artist import Artist, ArtistStatus
from groove.services.profile_completeness_service import ProfileCompletenessService
from groove.services.special_price_service import SpecialPriceService

logger = logging.getLogger(__name__)


def _publicly_listed():
    return (
        Artist.status == ArtistStatus.APPROVED,
        Artist.is_profile_complete.is_(True),
    )


class ArtistService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all_artists(self, city: Optional[str] = None) -> List[Artist]:
        """
        Approved artists with complete profiles, featured first then by name
        """
        stmt = select(Artist).where(*_publicly_listed())
        if city:
            stmt = stmt.where(func.lower(Artist.city) == city.strip().lower())
        result = await self.db.execute(
            stmt.order_by(Artist.is_featured.desc(), Artist.name)
        )
        return list(result.scalars().all())

    async def get_all_artists_for_admin(self) -> List[Artist]:
        result = await self.db.execute(select(Artist).order_by(Artist.name))
        return list(result.scalars().all())

    async def get_freelancers(self, instrument: Optional[str] = None) -> List[Artist]:
        result = await self.db.execute(
            select(Artist)
            .where(*_publicly_listed(), Artist.is_freelancer.is_(True))
            .order_by(Artist.name)
        )
        artists = list(result.scalars().all())
        if instrument:
            wanted = instrument.strip().lower()
            artists = [
                a for a in artists
                if any(wanted in (i or "").lower() for i in a.freelancer_instruments or [])
            ]
        return artists

    async def get_artist_by_id(self, artist_id: UUID) -> Artist:
        artist = await self.db.get(Artist, artist_id)
        if not artist:
            raise NotFoundError("Artist", artist_id)
        return artist

    async def get_artist_detail(self, artist_id: UUID, viewer_venue_id: Optional[UUID] = None) -> Dict[str, Any]:
        """
        Artist profile; when a venue is looking, its special prices replace
        the plan prices
        """
        artist = await self.get_artist_by_id(artist_id)
        data = artist.dict()
        if viewer_venue_id is not None and artist.plans:
            data["plans"] = await SpecialPriceService(self.db).apply_to_plans(artist, viewer_venue_id)
        return data

    async def update_artist(self, artist: Artist, updates: Dict[str, Any]) -> Artist:
        async with db_manager.transaction(self.db):
            for field, value in updates.items():
                setattr(artist, field, value)
            ProfileCompletenessService.refresh(artist, ProfileCompletenessService.check_artist)

        logger.info(f"Artist {artist.id} profile updated ({', '.join(sorted(updates)) or 'no fields'})")
        return artist

    async def get_featured_artists(self, limit: Optional[int] = None) -> List[Artist]:
        result = await self.db.execute(
            select(Artist)
            .where(Artist.status == ArtistStatus.APPROVED, Artist.is_featured.is_(True))
            .order_by(Artist.name)
            .limit(limit or settings.FEATURED_ARTISTS_LIMIT)
        )
        return list(result.scalars().all())

    async def get_genres_with_images(self) -> List[Dict[str, Any]]:
        """
        One image per primary genre, taken from the first approved artist
        found for it
        """
        result = await self.db.execute(
            select(Artist.genre, Artist.image_url)
            .where(Artist.status == ArtistStatus.APPROVED)
            .order_by(Artist.created_at)
        )
        showcase: Dict[str, Optional[str]] = {}
        for genre, image_url in result.all():
            primary = (genre or {}).get("primary")
            if primary and primary not in showcase:
                showcase[primary] = image_url
        return [
            {"genre": genre, "image_url": image_url}
            for genre, image_url in showcase.items()
        ][:settings.GENRE_SHOWCASE_LIMIT]
