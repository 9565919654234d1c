"""
Venue model
"""

from sqlalchemy import Column, String, Boolean, Enum, Integer, Text, Numeric
import enum

from groove.models.base import BaseModel, JSONType


class VenueStatus(str, enum.Enum):
    ACTIVE = "active"
    BLOCKED = "blocked"


class Venue(BaseModel):
    """
    Venue or event contractor profile.
    The primary key is the owning user's id.
    """
    __tablename__ = "venues"

    name = Column(String(255), nullable=False)
    email = Column(String(255))
    address = Column(Text)
    city = Column(String(100), index=True)
    image_url = Column(Text)
    status = Column(
        Enum(VenueStatus),
        default=VenueStatus.ACTIVE,
        nullable=False,
        index=True
    )
    contractor_type = Column(String(50))
    description = Column(Text)
    music_styles = Column(JSONType, default=list)
    capacity = Column(Integer)
    contact = Column(JSONType)
    website = Column(String(255))
    socials = Column(JSONType, default=dict)
    proposal_info = Column(JSONType)
    photos = Column(JSONType, default=list)
    equipment = Column(JSONType, default=list)
    average_rating = Column(Numeric(3, 2))
    rating_count = Column(Integer, default=0)
    profile_completeness = Column(
        JSONType,
        default=lambda: {"is_complete": False, "missing_fields": []}
    )
    is_profile_complete = Column(Boolean, default=False, nullable=False, index=True)

    def __repr__(self):
        return f"<Venue(id={self.id}, name={self.name}, city={self.city})>"
