"""
Admin back office: moderation, payouts, commission and platform ledger
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List
from uuid import UUID
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from groove.config import settings
from groove.core.database import db_manager
from groove.core.exceptions import NotFoundError
from groove.core.redis import RedisManager
from groove.models.artist import Artist, ArtistStatus
from groove.models.booking import Booking, PayoutStatus
from groove.models.musician import Musician
from groove.models.platform_setting import COMMISSION_RATE_KEY, PlatformSetting
from groove.models.transaction import PlatformTransaction, TransactionStatus, TransactionType
from groove.models.venue import Venue, VenueStatus
from groove.services.booking_service import enrich_booking

logger = logging.getLogger(__name__)

COMMISSION_CACHE_KEY = "platform:commission_rate"
COMMISSION_CATEGORY = "Show commission"


class AdminService:

    def __init__(self, db: AsyncSession, redis_manager: RedisManager = None):
        self.db = db
        self.redis_manager = redis_manager

    # Commission

    async def _cached_rate(self):
        if self.redis_manager is None:
            return None
        try:
            return await self.redis_manager.get(COMMISSION_CACHE_KEY)
        except Exception as e:
            logger.warning(f"Commission rate cache read failed: {e}")
            return None

    async def _invalidate_rate(self):
        if self.redis_manager is None:
            return
        try:
            await self.redis_manager.delete(COMMISSION_CACHE_KEY)
        except Exception as e:
            logger.warning(f"Commission rate cache invalidation failed: {e}")

    async def get_commission_rate(self) -> float:
        """
        Platform commission as a fraction (0.10 = 10%).
        Cached in Redis; falls back to the default when unset or unreadable.
        """
        cached = await self._cached_rate()
        if cached is not None:
            return float(cached)

        result = await self.db.execute(
            select(PlatformSetting.value).where(PlatformSetting.key == COMMISSION_RATE_KEY)
        )
        raw = result.scalar_one_or_none()
        try:
            rate = float(raw) if raw is not None else settings.DEFAULT_COMMISSION_RATE
        except ValueError:
            logger.warning(f"Stored commission rate {raw!r} is not a number; using default")
            rate = settings.DEFAULT_COMMISSION_RATE

        if self.redis_manager is not None:
            try:
                await self.redis_manager.set(COMMISSION_CACHE_KEY, rate, ttl=settings.COMMISSION_RATE_CACHE_TTL)
            except Exception as e:
                logger.warning(f"Commission rate cache write failed: {e}")
        return rate

    async def update_commission_rate(self, percent: float) -> float:
        """
        Store a percentage (e.g. 12.5) as a 4-place fraction ("0.1250")
        """
        value = (Decimal(str(percent)) / 100).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)

        async with db_manager.transaction(self.db):
            result = await self.db.execute(
                select(PlatformSetting).where(PlatformSetting.key == COMMISSION_RATE_KEY)
            )
            setting = result.scalar_one_or_none()
            if setting is None:
                self.db.add(PlatformSetting(key=COMMISSION_RATE_KEY, value=str(value)))
            else:
                setting.value = str(value)

        await self._invalidate_rate()
        logger.info(f"Commission rate set to {value}")
        return float(value)

    # Moderation

    async def update_artist_status(self, artist_id: UUID, status: ArtistStatus) -> Artist:
        artist = await self.db.get(Artist, artist_id)
        if not artist:
            raise NotFoundError("Artist", artist_id)
        async with db_manager.transaction(self.db):
            artist.status = ArtistStatus(status)
        logger.info(f"Artist {artist_id} status set to {artist.status.value}")
        return artist

    async def update_venue_status(self, venue_id: UUID, status: VenueStatus) -> Venue:
        venue = await self.db.get(Venue, venue_id)
        if not venue:
            raise NotFoundError("Venue", venue_id)
        async with db_manager.transaction(self.db):
            venue.status = VenueStatus(status)
        logger.info(f"Venue {venue_id} status set to {venue.status.value}")
        return venue

    async def update_musician_status(self, musician_id: UUID, status: ArtistStatus) -> Musician:
        musician = await self.db.get(Musician, musician_id)
        if not musician:
            raise NotFoundError("Musician", musician_id)
        async with db_manager.transaction(self.db):
            musician.status = ArtistStatus(status)
        return musician

    async def toggle_artist_feature(self, artist_id: UUID) -> Artist:
        artist = await self.db.get(Artist, artist_id)
        if not artist:
            raise NotFoundError("Artist", artist_id)
        async with db_manager.transaction(self.db):
            artist.is_featured = not artist.is_featured
        return artist

    # Bookings and payouts

    async def get_enriched_bookings(self) -> List[Dict[str, Any]]:
        result = await self.db.execute(
            select(Booking, Artist, Venue.name)
            .outerjoin(Artist, Artist.id == Booking.artist_id)
            .outerjoin(Venue, Venue.id == Booking.venue_id)
            .order_by(Booking.date.desc())
        )
        return [
            enrich_booking(booking, artist, venue_name, include_pin=True)
            for booking, artist, venue_name in result.all()
        ]

    async def update_payout_status(self, booking_id: UUID, payout_status: PayoutStatus) -> Booking:
        """
        Paying out records the platform's commission on the booking;
        reverting to pending removes it. Both happen in one transaction.
        """
        payout_status = PayoutStatus(payout_status)
        rate = Decimal(str(await self.get_commission_rate()))

        async with db_manager.transaction(self.db):
            booking = await self.db.get(Booking, booking_id, with_for_update=True, populate_existing=True)
            if not booking:
                raise NotFoundError("Booking", booking_id)
            booking.payout_status = payout_status

            existing = await self.db.execute(
                select(PlatformTransaction.id).where(
                    PlatformTransaction.booking_id == booking_id,
                    PlatformTransaction.category == COMMISSION_CATEGORY
                )
            )
            has_commission = existing.first() is not None

            if payout_status == PayoutStatus.PAID and not has_commission:
                # Commission is charged on the plan's list price; plan-less
                # bookings (direct offers, open gigs) carry none
                artist = await self.db.get(Artist, booking.artist_id)
                plan = artist.find_plan(booking.plan_id) if artist else None
                plan_price = Decimal(str((plan or {}).get("price") or 0))
                commission = (plan_price * rate).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
                if commission > 0:
                    venue = await self.db.get(Venue, booking.venue_id)
                    self.db.add(PlatformTransaction(
                        description=(
                            f"Commission - {artist.name if artist else 'removed artist'} show "
                            f"at {venue.name if venue else 'removed venue'}"
                        ),
                        type=TransactionType.INCOME,
                        category=COMMISSION_CATEGORY,
                        value=commission,
                        status=TransactionStatus.PAID,
                        due_date=booking.date,
                        booking_id=booking.id
                    ))
            elif payout_status == PayoutStatus.PENDING and has_commission:
                await self.db.execute(
                    delete(PlatformTransaction).where(
                        PlatformTransaction.booking_id == booking_id,
                        PlatformTransaction.category == COMMISSION_CATEGORY
                    )
                )

        logger.info(f"Booking {booking_id} payout set to {payout_status.value}")
        return booking

    # Platform ledger

    async def get_platform_finances(self) -> List[PlatformTransaction]:
        result = await self.db.execute(
            select(PlatformTransaction).order_by(
                PlatformTransaction.due_date.desc(),
                PlatformTransaction.created_at.desc()
            )
        )
        return list(result.scalars().all())

    async def add_platform_transaction(self, payload: Dict[str, Any]) -> PlatformTransaction:
        async with db_manager.transaction(self.db):
            transaction = PlatformTransaction(**{**payload, "value": Decimal(str(payload["value"]))})
            self.db.add(transaction)
            await self.db.flush()
        return transaction

    async def update_platform_transaction(self, transaction_id: UUID, payload: Dict[str, Any]) -> PlatformTransaction:
        transaction = await self.db.get(PlatformTransaction, transaction_id)
        if not transaction:
            raise NotFoundError("Platform transaction", transaction_id)
        async with db_manager.transaction(self.db):
            for field, value in payload.items():
                if field == "value":
                    value = Decimal(str(value))
                setattr(transaction, field, value)
        return transaction

    async def delete_platform_transaction(self, transaction_id: UUID) -> None:
        transaction = await self.db.get(PlatformTransaction, transaction_id)
        if not transaction:
            raise NotFoundError("Platform transaction", transaction_id)
        async with db_manager.transaction(self.db):
            await self.db.delete(transaction)
