"""
Musician profile schemas
"""

from pydantic import Field
from typing import Optional, List, Dict, Any

from groove.schemas.base import BaseSchema, IDSchema, TimestampSchema, ProfileCompleteness
from groove.schemas.artist import Song
from groove.models.artist import ArtistStatus


class MusicianUpdate(BaseSchema):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    instrument: Optional[str] = Field(None, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = None
    image_url: Optional[str] = None
    youtube_video_id: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = Field(None, max_length=20)
    socials: Optional[Dict[str, str]] = None
    styles: Optional[List[str]] = None
    gallery: Optional[List[str]] = None
    repertoire: Optional[List[Song]] = None


class MusicianResponse(IDSchema, TimestampSchema):
    name: str
    email: Optional[str] = None
    instrument: Optional[str] = None
    city: Optional[str] = None
    bio: Optional[str] = None
    image_url: Optional[str] = None
    youtube_video_id: Optional[str] = None
    phone: Optional[str] = None
    socials: Optional[Dict[str, Any]] = None
    styles: Optional[List[str]] = None
    gallery: Optional[List[str]] = None
    repertoire: Optional[List[Song]] = None
    status: ArtistStatus
    profile_completeness: Optional[ProfileCompleteness] = None
    is_profile_complete: bool = False
