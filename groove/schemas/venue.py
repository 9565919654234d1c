"""
Venue profile schemas
"""

from pydantic import Field
from typing import Optional, List, Dict, Any

from groove.schemas.base import BaseSchema, IDSchema, TimestampSchema, ProfileCompleteness
from groove.models.venue import VenueStatus


class VenueContact(BaseSchema):
    name: str = ""
    phone: str = ""


class VenueUpdate(BaseSchema):
    """Partial venue profile update"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    image_url: Optional[str] = None
    contractor_type: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None
    music_styles: Optional[List[str]] = None
    capacity: Optional[int] = Field(None, ge=0)
    contact: Optional[VenueContact] = None
    website: Optional[str] = Field(None, max_length=255)
    socials: Optional[Dict[str, str]] = None
    proposal_info: Optional[Dict[str, Any]] = None
    photos: Optional[List[str]] = None
    equipment: Optional[List[str]] = None


class VenueResponse(IDSchema, TimestampSchema):
    """Full venue profile"""
    name: str
    email: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    image_url: Optional[str] = None
    status: VenueStatus
    contractor_type: Optional[str] = None
    description: Optional[str] = None
    music_styles: Optional[List[str]] = None
    capacity: Optional[int] = None
    contact: Optional[VenueContact] = None
    website: Optional[str] = None
    socials: Optional[Dict[str, Any]] = None
    proposal_info: Optional[Dict[str, Any]] = None
    photos: Optional[List[str]] = None
    equipment: Optional[List[str]] = None
    average_rating: Optional[float] = None
    rating_count: Optional[int] = 0
    profile_completeness: Optional[ProfileCompleteness] = None
    is_profile_complete: bool = False
