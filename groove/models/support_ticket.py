"""
Support ticket model
"""

from sqlalchemy import Column, ForeignKey, Enum, Text, Uuid
import enum

from groove.models.base import BaseModel
from groove.models.chat import SenderType


class TicketStatus(str, enum.Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class SupportTicket(BaseModel):
    """
    Problem report raised against a booking
    """
    __tablename__ = "support_tickets"

    booking_id = Column(Uuid(as_uuid=True), ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True)
    reporter_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    reporter_type = Column(Enum(SenderType, name="reportertype"), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(
        Enum(TicketStatus),
        default=TicketStatus.OPEN,
        nullable=False,
        index=True
    )

    def __repr__(self):
        return f"<SupportTicket(id={self.id}, booking_id={self.booking_id}, status={self.status})>"
