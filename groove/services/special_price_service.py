"""
Special prices: an artist's per-venue override of a plan's price
"""

from decimal import Decimal
from typing import Any, Dict, List
from uuid import UUID
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import db_manager
from groove.core.exceptions import NotFoundError, ValidationError
from groove.models.artist import Artist
from groove.models.special_price import SpecialPrice
from groove.models.venue import Venue

logger = logging.getLogger(__name__)


class SpecialPriceService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_special_prices(self, artist_id: UUID, venue_id: UUID) -> List[SpecialPrice]:
        result = await self.db.execute(
            select(SpecialPrice)
            .where(SpecialPrice.artist_id == artist_id, SpecialPrice.venue_id == venue_id)
            .order_by(SpecialPrice.plan_id)
        )
        return list(result.scalars().all())

    async def get_special_prices_for_artist(self, artist_id: UUID) -> List[Dict[str, Any]]:
        """
        All overrides an artist has granted, with a venue summary
        """
        result = await self.db.execute(
            select(SpecialPrice, Venue)
            .outerjoin(Venue, Venue.id == SpecialPrice.venue_id)
            .where(SpecialPrice.artist_id == artist_id)
            .order_by(Venue.name, SpecialPrice.plan_id)
        )
        prices = []
        for price, venue in result.all():
            data = price.dict()
            data["venue"] = venue
            prices.append(data)
        return prices

    async def set_special_prices_for_venue(
        self,
        artist: Artist,
        venue_id: UUID,
        prices: List[Dict[str, Any]]
    ) -> List[SpecialPrice]:
        """
        Upsert on (artist, venue, plan). Plans not listed keep their override.
        """
        venue = await self.db.get(Venue, venue_id)
        if not venue:
            raise NotFoundError("Venue", venue_id)

        for item in prices:
            if artist.find_plan(item["plan_id"]) is None:
                raise ValidationError(f"Plan {item['plan_id']} does not exist", field="plan_id")

        async with db_manager.transaction(self.db):
            existing = {
                price.plan_id: price
                for price in await self.get_special_prices(artist.id, venue_id)
            }
            for item in prices:
                value = Decimal(str(item["special_price"]))
                row = existing.get(item["plan_id"])
                if row is None:
                    row = SpecialPrice(
                        artist_id=artist.id,
                        venue_id=venue_id,
                        plan_id=item["plan_id"],
                        special_price=value
                    )
                    self.db.add(row)
                    existing[item["plan_id"]] = row
                else:
                    row.special_price = value
            await self.db.flush()

        return sorted(existing.values(), key=lambda p: p.plan_id)

    async def delete_special_prices_for_venue(self, artist_id: UUID, venue_id: UUID) -> int:
        async with db_manager.transaction(self.db):
            result = await self.db.execute(
                delete(SpecialPrice).where(
                    SpecialPrice.artist_id == artist_id,
                    SpecialPrice.venue_id == venue_id
                )
            )
        return result.rowcount

    async def apply_to_plans(self, artist: Artist, venue_id: UUID) -> List[Dict[str, Any]]:
        """
        Artist's plans as the given venue sees them
        """
        plans = [dict(plan) for plan in artist.plans or []]
        overrides = {
            price.plan_id: float(price.special_price)
            for price in await self.get_special_prices(artist.id, venue_id)
        }
        for plan in plans:
            if plan.get("id") in overrides:
                plan["price"] = overrides[plan["id"]]
        return plans

    async def price_for_plan(self, artist: Artist, venue_id: UUID, plan: Dict[str, Any]) -> Decimal:
        result = await self.db.execute(
            select(SpecialPrice.special_price).where(
                SpecialPrice.artist_id == artist.id,
                SpecialPrice.venue_id == venue_id,
                SpecialPrice.plan_id == plan["id"]
            )
        )
        special = result.scalar_one_or_none()
        if special is not None:
            return Decimal(special)
        return Decimal(str(plan.get("price", 0)))
