"""
Referral programme: artists who sign up with another artist's code, and the
PRO month the referrer earns when one of them goes PRO
"""

from calendar import monthrange
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from groove.config import settings
from groove.core.database import db_manager
from groove.core.exceptions import NotFoundError
from groove.models.artist import Artist

logger = logging.getLogger(__name__)

STATUS_PRO = "pro"
STATUS_REGISTERED = "registered"


def add_months(moment: datetime, months: int) -> datetime:
    """Same day-of-month `months` later, clamped to the month's last day"""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def _aware(moment: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def is_currently_pro(artist: Artist, now: Optional[datetime] = None) -> bool:
    now = now or datetime.now(timezone.utc)
    ends_at = _aware(artist.pro_subscription_ends_at)
    return bool(artist.is_pro) or (ends_at is not None and ends_at > now)


def extend_subscription(artist: Artist, months: int, now: Optional[datetime] = None) -> datetime:
    """
    Push the PRO end date `months` forward from whichever is later: now or
    the current end date
    """
    now = now or datetime.now(timezone.utc)
    current_end = _aware(artist.pro_subscription_ends_at)
    start = current_end if current_end and current_end > now else now
    artist.pro_subscription_ends_at = add_months(start, months)
    artist.is_pro = True
    return artist.pro_subscription_ends_at


class ReferralService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_referral_stats(self, artist_id: UUID) -> Dict[str, Any]:
        result = await self.db.execute(
            select(Artist)
            .where(Artist.referred_by == artist_id)
            .order_by(Artist.created_at.desc())
        )
        now = datetime.now(timezone.utc)
        referrals = [
            {
                "id": referred.id,
                "name": referred.name,
                "registered_at": referred.created_at,
                "status": STATUS_PRO if is_currently_pro(referred, now) else STATUS_REGISTERED,
            }
            for referred in result.scalars().all()
        ]
        return {
            "total_referrals": len(referrals),
            "pro_conversions": sum(1 for r in referrals if r["status"] == STATUS_PRO),
            "referrals": referrals,
        }

    async def _apply_referral_reward(self, new_pro_artist: Artist) -> bool:
        if not new_pro_artist.referred_by:
            logger.info(f"Artist {new_pro_artist.id} was not referred; no reward to grant")
            return False

        result = await self.db.execute(
            select(Artist).where(Artist.id == new_pro_artist.referred_by).with_for_update()
        )
        referrer = result.scalar_one_or_none()
        if not referrer:
            logger.warning(
                f"Referring artist {new_pro_artist.referred_by} of {new_pro_artist.id} not found"
            )
            return False

        new_end = extend_subscription(referrer, settings.REFERRAL_REWARD_MONTHS)
        logger.info(
            f"Granted {settings.REFERRAL_REWARD_MONTHS} month(s) of PRO to artist {referrer.id}; "
            f"subscription now ends {new_end.isoformat()}"
        )
        return True

    async def grant_referral_reward(self, new_pro_artist_id: UUID) -> bool:
        """
        Reward whoever referred a newly PRO artist. Returns False when there is
        nobody to reward.
        """
        async with db_manager.transaction(self.db):
            new_pro_artist = await self.db.get(Artist, new_pro_artist_id)
            if not new_pro_artist:
                raise NotFoundError("Artist", new_pro_artist_id)
            return await self._apply_referral_reward(new_pro_artist)

    async def activate_pro(self, artist_id: UUID, months: int = 1) -> Dict[str, Any]:
        """
        Mark an artist PRO and reward their referrer in the same transaction
        """
        async with db_manager.transaction(self.db):
            artist = await self.db.get(Artist, artist_id, with_for_update=True, populate_existing=True)
            if not artist:
                raise NotFoundError("Artist", artist_id)
            extend_subscription(artist, months)
            rewarded = await self._apply_referral_reward(artist)

        return {"artist_id": artist.id, "is_pro": artist.is_pro, "referral_rewarded": rewarded}
