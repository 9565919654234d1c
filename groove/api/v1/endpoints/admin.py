"""
Admin back-office endpoints
"""

from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.redis import RedisManager, get_redis_manager
from groove.core.security import require_admin
from groove.models.user import User
from groove.schemas.admin import (
    ArtistStatusUpdate,
    CommissionRateResponse,
    CommissionRateUpdate,
    FeatureToggleResponse,
    MusicianStatusUpdate,
    PayoutStatusUpdate,
    ProActivationResponse,
    VenueStatusUpdate,
)
from groove.schemas.artist import ArtistResponse
from groove.schemas.booking import BookingResponse, EnrichedBookingResponse
from groove.schemas.finance import (
    PlatformTransactionCreate,
    PlatformTransactionResponse,
    PlatformTransactionUpdate,
)
from groove.schemas.musician import MusicianResponse
from groove.schemas.response import MessageResponse
from groove.schemas.support import EnrichedTicketResponse, TicketResponse, TicketStatusUpdate
from groove.schemas.venue import VenueResponse
from groove.services.admin_service import AdminService
from groove.services.artist_service import ArtistService
from groove.services.musician_service import MusicianService
from groove.services.referral_service import ReferralService
from groove.services.support_service import SupportService
from groove.services.venue_service import VenueService

router = APIRouter()


def _rate_response(rate: float) -> dict:
    return {"rate": rate, "percent": round(rate * 100, 2)}


# Commission

@router.get("/commission", response_model=CommissionRateResponse)
async def get_commission_rate(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
    redis_manager: RedisManager = Depends(get_redis_manager)
) -> Any:
    return _rate_response(await AdminService(db, redis_manager).get_commission_rate())


@router.put("/commission", response_model=CommissionRateResponse)
async def update_commission_rate(
    rate_update: CommissionRateUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
    redis_manager: RedisManager = Depends(get_redis_manager)
) -> Any:
    """
    Set the platform commission as a percentage (e.g. 12.5)
    """
    rate = await AdminService(db, redis_manager).update_commission_rate(rate_update.percent)
    return _rate_response(rate)


# Moderation

@router.get("/artists", response_model=List[ArtistResponse])
async def list_all_artists(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await ArtistService(db).get_all_artists_for_admin()


@router.patch("/artists/{artist_id}/status", response_model=ArtistResponse)
async def update_artist_status(
    artist_id: UUID,
    status_update: ArtistStatusUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await AdminService(db).update_artist_status(artist_id, status_update.status)


@router.post("/artists/{artist_id}/feature", response_model=FeatureToggleResponse)
async def toggle_artist_feature(
    artist_id: UUID,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    artist = await AdminService(db).toggle_artist_feature(artist_id)
    return {"artist_id": artist.id, "is_featured": artist.is_featured}


@router.post("/artists/{artist_id}/activate-pro", response_model=ProActivationResponse)
async def activate_pro(
    artist_id: UUID,
    months: int = Query(1, ge=1, le=24),
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Turn on PRO for an artist; whoever referred them earns free months
    """
    return await ReferralService(db).activate_pro(artist_id, months)


@router.post("/artists/{artist_id}/referral-reward", response_model=MessageResponse)
async def grant_referral_reward(
    artist_id: UUID,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    rewarded = await ReferralService(db).grant_referral_reward(artist_id)
    if rewarded:
        return {"message": "Referral reward granted"}
    return {"success": False, "message": "Artist was not referred; no reward granted"}


@router.get("/venues", response_model=List[VenueResponse])
async def list_all_venues(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await VenueService(db).get_all_venues_for_admin()


@router.patch("/venues/{venue_id}/status", response_model=VenueResponse)
async def update_venue_status(
    venue_id: UUID,
    status_update: VenueStatusUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await AdminService(db).update_venue_status(venue_id, status_update.status)


@router.get("/musicians", response_model=List[MusicianResponse])
async def list_all_musicians(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await MusicianService(db).get_all_musicians_for_admin()


@router.patch("/musicians/{musician_id}/status", response_model=MusicianResponse)
async def update_musician_status(
    musician_id: UUID,
    status_update: MusicianStatusUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await AdminService(db).update_musician_status(musician_id, status_update.status)


# Bookings and payouts

@router.get("/bookings", response_model=List[EnrichedBookingResponse])
async def list_all_bookings(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await AdminService(db).get_enriched_bookings()


@router.patch("/bookings/{booking_id}/payout", response_model=BookingResponse)
async def update_payout_status(
    booking_id: UUID,
    payout_update: PayoutStatusUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
    redis_manager: RedisManager = Depends(get_redis_manager)
) -> Any:
    """
    Mark the artist's payout done (records the commission) or pending again
    (removes it)
    """
    return await AdminService(db, redis_manager).update_payout_status(
        booking_id, payout_update.payout_status
    )


# Platform ledger

@router.get("/finances", response_model=List[PlatformTransactionResponse])
async def list_platform_finances(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await AdminService(db).get_platform_finances()


@router.post("/finances", response_model=PlatformTransactionResponse, status_code=status.HTTP_201_CREATED)
async def add_platform_transaction(
    transaction_data: PlatformTransactionCreate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await AdminService(db).add_platform_transaction(transaction_data.model_dump())


@router.put("/finances/{transaction_id}", response_model=PlatformTransactionResponse)
async def update_platform_transaction(
    transaction_id: UUID,
    transaction_data: PlatformTransactionUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await AdminService(db).update_platform_transaction(
        transaction_id, transaction_data.model_dump(exclude_unset=True)
    )


@router.delete("/finances/{transaction_id}", response_model=MessageResponse)
async def delete_platform_transaction(
    transaction_id: UUID,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    await AdminService(db).delete_platform_transaction(transaction_id)
    return {"message": "Transaction deleted"}


# Support

@router.get("/tickets", response_model=List[EnrichedTicketResponse])
async def list_tickets(
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await SupportService(db).get_all_tickets()


@router.patch("/tickets/{ticket_id}/status", response_model=TicketResponse)
async def update_ticket_status(
    ticket_id: UUID,
    status_update: TicketStatusUpdate,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await SupportService(db).update_ticket_status(ticket_id, status_update.status)
