"""
Admin back-office schemas
"""

from pydantic import Field
from uuid import UUID

from groove.schemas.base import BaseSchema
from groove.models.artist import ArtistStatus
from groove.models.venue import VenueStatus
from groove.models.booking import PayoutStatus


class CommissionRateResponse(BaseSchema):
    """Rate as a fraction (0.1) and as a percentage (10.0)"""
    rate: float
    percent: float


class CommissionRateUpdate(BaseSchema):
    percent: float = Field(..., ge=0, le=100)


class ArtistStatusUpdate(BaseSchema):
    status: ArtistStatus


class VenueStatusUpdate(BaseSchema):
    status: VenueStatus


class MusicianStatusUpdate(BaseSchema):
    status: ArtistStatus


class PayoutStatusUpdate(BaseSchema):
    payout_status: PayoutStatus


class FeatureToggleResponse(BaseSchema):
    artist_id: UUID
    is_featured: bool


class ProActivationResponse(BaseSchema):
    artist_id: UUID
    is_pro: bool
    referral_rewarded: bool
