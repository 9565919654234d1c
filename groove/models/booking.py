"""
Booking and ManualGig models
"""

from sqlalchemy import Column, String, ForeignKey, Enum, Numeric, Date, DateTime, Boolean, Integer, Uuid
from sqlalchemy.orm import relationship
import enum

from groove.models.base import BaseModel


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"


class PayoutStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"


class Booking(BaseModel):
    """
    Platform-mediated reservation of an artist for one date
    """
    __tablename__ = "bookings"

    artist_id = Column(Uuid(as_uuid=True), ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    venue_id = Column(Uuid(as_uuid=True), ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)
    # Id of an entry in artist.plans; null for direct offers and open gigs
    plan_id = Column(Integer)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5))
    end_time = Column(String(5))
    payment = Column(Numeric(10, 2), default=0, nullable=False)
    status = Column(
        Enum(BookingStatus),
        default=BookingStatus.PENDING,
        nullable=False,
        index=True
    )
    payout_status = Column(
        Enum(PayoutStatus),
        default=PayoutStatus.PENDING,
        nullable=False,
        index=True
    )
    confirmation_pin = Column(String(4), nullable=False)
    artist_checked_in = Column(Boolean, default=False, nullable=False)
    check_in_time = Column(DateTime(timezone=True))

    # Relationships
    artist = relationship("Artist", lazy="raise")
    venue = relationship("Venue", lazy="raise")

    def __repr__(self):
        return f"<Booking(id={self.id}, artist_id={self.artist_id}, date={self.date}, status={self.status})>"


class ManualGig(BaseModel):
    """
    Externally booked show, kept for calendar and finances only
    """
    __tablename__ = "manual_gigs"

    artist_id = Column(Uuid(as_uuid=True), ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    event_name = Column(String(255), nullable=False)
    date = Column(Date, nullable=False, index=True)
    start_time = Column(String(5))
    end_time = Column(String(5))
    payment = Column(Numeric(10, 2), default=0, nullable=False)

    def __repr__(self):
        return f"<ManualGig(id={self.id}, event_name={self.event_name}, date={self.date})>"
