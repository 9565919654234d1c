"""
Artist profile schemas
"""

from pydantic import Field, field_validator
from typing import Optional, List, Dict, Any
from uuid import UUID
from datetime import datetime

from groove.schemas.base import BaseSchema, IDSchema, TimestampSchema, ProfileCompleteness
from groove.models.artist import ArtistStatus


class CostItem(BaseSchema):
    id: int
    description: str
    value: float
    status: str = "pending"


class Plan(BaseSchema):
    """Bookable show package"""
    id: int
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    description: str = ""
    includes: List[str] = []
    costs: List[CostItem] = []


class Genre(BaseSchema):
    primary: str = ""
    secondary: List[str] = []


class Song(BaseSchema):
    title: str
    artist: str
    duration: Optional[str] = None
    preview_url: Optional[str] = None


class Testimonial(BaseSchema):
    quote: str
    author: str
    source: str = ""


class TechnicalRequirements(BaseSchema):
    space: str = ""
    power: str = ""
    provided_by_artist: List[str] = []
    provided_by_contractor: List[str] = []


class ArtistUpdate(BaseSchema):
    """Partial profile update; omitted fields keep their value"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)
    city: Optional[str] = Field(None, max_length=100)
    genre: Optional[Genre] = None
    image_url: Optional[str] = None
    youtube_video_id: Optional[str] = Field(None, max_length=50)
    bio: Optional[str] = None
    socials: Optional[Dict[str, str]] = None
    gallery: Optional[List[str]] = None
    plans: Optional[List[Plan]] = None
    repertoire: Optional[List[Song]] = None
    testimonials: Optional[List[Testimonial]] = None
    hospitality_rider: Optional[List[str]] = None
    technical_requirements: Optional[TechnicalRequirements] = None
    band_members: Optional[List[Dict[str, Any]]] = None
    is_freelancer: Optional[bool] = None
    freelancer_instruments: Optional[List[str]] = None
    freelancer_rate: Optional[float] = Field(None, ge=0)
    freelancer_rate_unit: Optional[str] = Field(None, max_length=20)

    @field_validator('plans')
    @classmethod
    def validate_unique_plan_ids(cls, v):
        if v is not None and len({plan.id for plan in v}) != len(v):
            raise ValueError('Plan ids must be unique')
        return v


class ArtistResponse(IDSchema, TimestampSchema):
    """Full artist profile"""
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    genre: Optional[Genre] = None
    image_url: Optional[str] = None
    youtube_video_id: Optional[str] = None
    bio: Optional[str] = None
    socials: Optional[Dict[str, Any]] = None
    booked_dates: List[str] = []
    gallery: Optional[List[str]] = None
    plans: List[Plan] = []
    repertoire: Optional[List[Song]] = None
    testimonials: Optional[List[Testimonial]] = None
    hospitality_rider: Optional[List[str]] = None
    technical_requirements: Optional[TechnicalRequirements] = None
    band_members: Optional[List[Dict[str, Any]]] = None
    status: ArtistStatus
    is_pro: bool = False
    pro_subscription_ends_at: Optional[datetime] = None
    profile_completeness: Optional[ProfileCompleteness] = None
    is_profile_complete: bool = False
    is_freelancer: bool = False
    freelancer_instruments: Optional[List[str]] = None
    freelancer_rate: Optional[float] = None
    freelancer_rate_unit: Optional[str] = None
    is_featured: bool = False
    quality_score: Optional[int] = None
    quality_issues: Optional[List[Any]] = None
    referred_by: Optional[UUID] = None


class GenreShowcaseItem(BaseSchema):
    """First artist image found for a primary genre"""
    genre: str
    image_url: Optional[str] = None
