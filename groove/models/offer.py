"""
Direct offers and open gig models
"""

from sqlalchemy import Column, String, ForeignKey, Enum, Numeric, Date, Text, Uuid
from sqlalchemy.orm import relationship
import enum

from groove.models.base import BaseModel


class OfferStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    COUNTERED = "countered"


class GigStatus(str, enum.Enum):
    OPEN = "open"
    BOOKED = "booked"


class DirectOffer(BaseModel):
    """
    Venue proposal addressed to a single artist
    """
    __tablename__ = "direct_offers"

    venue_id = Column(Uuid(as_uuid=True), ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)
    artist_id = Column(Uuid(as_uuid=True), ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    start_time = Column(String(5))
    end_time = Column(String(5))
    payment = Column(Numeric(10, 2), nullable=False)
    message = Column(Text)
    status = Column(
        Enum(OfferStatus),
        default=OfferStatus.PENDING,
        nullable=False,
        index=True
    )

    artist = relationship("Artist", lazy="raise")
    venue = relationship("Venue", lazy="raise")

    def __repr__(self):
        return f"<DirectOffer(id={self.id}, artist_id={self.artist_id}, status={self.status})>"


class GigOffer(BaseModel):
    """
    Open slot published by a venue that any artist can take
    """
    __tablename__ = "gig_offers"

    venue_id = Column(Uuid(as_uuid=True), ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    start_time = Column(String(5))
    end_time = Column(String(5))
    payment = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text)
    genre = Column(String(100))
    status = Column(
        Enum(GigStatus),
        default=GigStatus.OPEN,
        nullable=False,
        index=True
    )
    booked_by_artist_id = Column(Uuid(as_uuid=True), ForeignKey("artists.id", ondelete="SET NULL"))

    venue = relationship("Venue", lazy="raise")
    booked_by = relationship("Artist", lazy="raise")

    def __repr__(self):
        return f"<GigOffer(id={self.id}, venue_id={self.venue_id}, status={self.status})>"
