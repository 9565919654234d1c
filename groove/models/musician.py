"""
Freelance musician model
"""

from sqlalchemy import Column, String, Boolean, Enum, Text

from groove.models.artist import ArtistStatus
from groove.models.base import BaseModel, JSONType


class Musician(BaseModel):
    """
    Freelance instrumentalist profile
    """
    __tablename__ = "musicians"

    name = Column(String(255), nullable=False)
    email = Column(String(255))
    instrument = Column(String(100))
    city = Column(String(100), index=True)
    bio = Column(Text)
    image_url = Column(Text)
    youtube_video_id = Column(String(50))
    phone = Column(String(20))
    socials = Column(JSONType, default=dict)
    styles = Column(JSONType, default=list)
    gallery = Column(JSONType, default=list)
    repertoire = Column(JSONType, default=list)
    status = Column(
        Enum(ArtistStatus, name="musicianstatus"),
        default=ArtistStatus.PENDING,
        nullable=False,
        index=True
    )
    profile_completeness = Column(
        JSONType,
        default=lambda: {"is_complete": False, "missing_fields": []}
    )
    is_profile_complete = Column(Boolean, default=False, nullable=False, index=True)

    def __repr__(self):
        return f"<Musician(id={self.id}, name={self.name}, instrument={self.instrument})>"
