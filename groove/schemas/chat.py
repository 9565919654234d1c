"""
Conversation and message schemas
"""

from pydantic import Field
from typing import Optional, List
from uuid import UUID
from datetime import datetime

from groove.schemas.base import BaseSchema, IDSchema, TimestampSchema, ProfileSummary
from groove.models.chat import SenderType


class ConversationStart(BaseSchema):
    """Open (or reuse) the thread with the other side of the marketplace"""
    counterpart_id: UUID


class ConversationResponse(IDSchema, TimestampSchema):
    artist_id: UUID
    venue_id: UUID


class MessageCreate(BaseSchema):
    content: str = Field(..., max_length=5000)


class ChatMessageResponse(IDSchema):
    conversation_id: UUID
    sender_id: UUID
    sender_type: SenderType
    content: str
    read_by: List[UUID] = []
    created_at: datetime


class ConversationSummary(ConversationResponse):
    other_party: ProfileSummary
    last_message: Optional[ChatMessageResponse] = None
    unread_count: int = 0


class ConversationDetail(ConversationResponse):
    other_party: Optional[ProfileSummary] = None
    messages: List[ChatMessageResponse] = []


class UnreadCountResponse(BaseSchema):
    unread_count: int


class MarkedReadResponse(BaseSchema):
    conversation_id: UUID
    marked: int
