"""
Special price schemas
"""

from pydantic import Field
from typing import List, Optional
from uuid import UUID

from groove.schemas.base import BaseSchema, IDSchema, ProfileSummary


class SpecialPriceItem(BaseSchema):
    plan_id: int
    special_price: float = Field(..., ge=0)


class SpecialPricesSet(BaseSchema):
    venue_id: UUID
    prices: List[SpecialPriceItem] = Field(..., min_length=1)


class SpecialPriceResponse(IDSchema):
    artist_id: UUID
    venue_id: UUID
    plan_id: int
    special_price: float
    venue: Optional[ProfileSummary] = None
