"""
Referral program endpoints
"""

from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.security import get_current_artist
from groove.models.artist import Artist
from groove.schemas.referral import ReferralStats
from groove.services.referral_service import ReferralService

router = APIRouter()


@router.get("/me", response_model=ReferralStats)
async def my_referrals(
    artist: Artist = Depends(get_current_artist),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Artists who registered with my referral code (my artist id)
    """
    return await ReferralService(db).get_referral_stats(artist.id)
