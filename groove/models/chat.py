"""
Conversation, Message and MessageRead models
"""

from sqlalchemy import Column, String, ForeignKey, Enum, Text, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
import enum

from groove.models.base import BaseModel


class SenderType(str, enum.Enum):
    ARTIST = "artist"
    VENUE = "venue"


class Conversation(BaseModel):
    """
    One thread per artist/venue pair
    """
    __tablename__ = "conversations"
    __table_args__ = (
        UniqueConstraint("artist_id", "venue_id", name="uq_conversation_pair"),
    )

    artist_id = Column(Uuid(as_uuid=True), ForeignKey("artists.id", ondelete="CASCADE"), nullable=False, index=True)
    venue_id = Column(Uuid(as_uuid=True), ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True)

    messages = relationship("Message", back_populates="conversation", cascade="all, delete-orphan", lazy="raise")

    def has_participant(self, user_id) -> bool:
        return user_id in (self.artist_id, self.venue_id)

    def __repr__(self):
        return f"<Conversation(id={self.id}, artist_id={self.artist_id}, venue_id={self.venue_id})>"


class Message(BaseModel):
    """
    Chat message
    """
    __tablename__ = "messages"

    conversation_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    sender_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    sender_type = Column(Enum(SenderType), nullable=False)
    content = Column(Text, nullable=False)

    conversation = relationship("Conversation", back_populates="messages", lazy="raise")
    reads = relationship("MessageRead", cascade="all, delete-orphan", lazy="selectin")

    @property
    def read_by(self):
        return [read.user_id for read in self.reads]

    def __repr__(self):
        return f"<Message(id={self.id}, conversation_id={self.conversation_id}, sender_id={self.sender_id})>"


class MessageRead(BaseModel):
    """
    Read receipt: one row per (message, reader)
    """
    __tablename__ = "message_reads"
    __table_args__ = (
        UniqueConstraint("message_id", "user_id", name="uq_message_read"),
    )

    message_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    def __repr__(self):
        return f"<MessageRead(message_id={self.message_id}, user_id={self.user_id})>"
