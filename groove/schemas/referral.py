"""
Referral schemas
"""

from typing import List, Literal
from uuid import UUID
from datetime import datetime

from groove.schemas.base import BaseSchema


class ReferralEntry(BaseSchema):
    id: UUID
    name: str
    registered_at: datetime
    status: Literal["registered", "pro"]


class ReferralStats(BaseSchema):
    total_referrals: int
    pro_conversions: int
    referrals: List[ReferralEntry]
