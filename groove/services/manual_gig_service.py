"""
Manual gigs: shows an artist booked outside the platform
"""

from decimal import Decimal
from typing import Any, Dict, List
from uuid import UUID
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import db_manager
from groove.core.exceptions import NotFoundError
from groove.models.booking import ManualGig
from groove.models.transaction import PersonalTransaction, TransactionStatus, TransactionType
from groove.services.booking_service import (
    add_booked_dates,
    date_is_occupied,
    lock_artist,
    remove_booked_dates,
)

logger = logging.getLogger(__name__)

GIG_INCOME_CATEGORY = "Fee"


class ManualGigService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_manual_gigs(self, artist_id: UUID) -> List[ManualGig]:
        result = await self.db.execute(
            select(ManualGig)
            .where(ManualGig.artist_id == artist_id)
            .order_by(ManualGig.date)
        )
        return list(result.scalars().all())

    async def get_manual_gig_by_id(self, gig_id: UUID, artist_id: UUID) -> ManualGig:
        result = await self.db.execute(
            select(ManualGig).where(ManualGig.id == gig_id, ManualGig.artist_id == artist_id)
        )
        gig = result.scalar_one_or_none()
        if not gig:
            raise NotFoundError("Manual gig", gig_id)
        return gig

    async def add_manual_gig(self, payload: Dict[str, Any], artist_id: UUID) -> ManualGig:
        """
        Record the gig, block its date and, when paid, log the expected fee
        as pending income
        """
        async with db_manager.transaction(self.db):
            artist = await lock_artist(self.db, artist_id)

            gig = ManualGig(artist_id=artist_id, **payload)
            self.db.add(gig)
            add_booked_dates(artist, [gig.date.isoformat()])

            payment = Decimal(str(payload.get("payment") or 0))
            if payment > 0:
                self.db.add(PersonalTransaction(
                    artist_id=artist_id,
                    type=TransactionType.INCOME,
                    description=f"Show: {gig.event_name}",
                    category=GIG_INCOME_CATEGORY,
                    value=payment,
                    status=TransactionStatus.PENDING,
                    date=gig.date
                ))
            await self.db.flush()

        logger.info(f"Manual gig {gig.id} added for artist {artist_id} on {gig.date}")
        return gig

    async def update_manual_gig(self, gig_id: UUID, payload: Dict[str, Any], artist_id: UUID) -> ManualGig:
        async with db_manager.transaction(self.db):
            gig = await self.get_manual_gig_by_id(gig_id, artist_id)
            old_date = gig.date

            for field, value in payload.items():
                setattr(gig, field, value)

            if gig.date != old_date:
                artist = await lock_artist(self.db, artist_id)
                if not await date_is_occupied(self.db, artist_id, old_date, exclude_gig_id=gig.id):
                    remove_booked_dates(artist, [old_date.isoformat()])
                add_booked_dates(artist, [gig.date.isoformat()])
            await self.db.flush()

        return gig

    async def delete_manual_gig(self, gig_id: UUID, artist_id: UUID) -> None:
        """
        Remove the gig; its date is freed unless something else still occupies it
        """
        async with db_manager.transaction(self.db):
            gig = await self.get_manual_gig_by_id(gig_id, artist_id)
            artist = await lock_artist(self.db, artist_id)
            day = gig.date

            await self.db.delete(gig)
            await self.db.flush()

            if not await date_is_occupied(self.db, artist_id, day):
                remove_booked_dates(artist, [day.isoformat()])

        logger.info(f"Manual gig {gig_id} deleted for artist {artist_id}")
