"""
Chat service

One conversation per (artist, venue) pair. Read receipts live in
`message_reads`; unread counts are computed per request.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import and_, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import db_manager
from groove.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from groove.models.artist import Artist
from groove.models.base import utcnow
from groove.models.chat import Conversation, Message, MessageRead, SenderType
from groove.models.user import User, UserRole
from groove.models.venue import Venue
from groove.services.realtime_service import RealtimePublisher

logger = logging.getLogger(__name__)


def _participant_column(user_type: SenderType):
    return Conversation.artist_id if user_type == SenderType.ARTIST else Conversation.venue_id


def sender_type_for(user: User) -> SenderType:
    if user.role == UserRole.ARTIST:
        return SenderType.ARTIST
    if user.role == UserRole.VENUE:
        return SenderType.VENUE
    raise AuthorizationError("Only artists and venues can use chat")


class ChatService:

    def __init__(self, db: AsyncSession, publisher: Optional[RealtimePublisher] = None):
        self.db = db
        self.publisher = publisher or RealtimePublisher(None)

    async def find_or_create_conversation(self, artist_id: UUID, venue_id: UUID) -> Conversation:
        conversation = await self._find_conversation(artist_id, venue_id)
        if conversation:
            return conversation

        if not await self.db.get(Artist, artist_id):
            raise NotFoundError("Artist", artist_id)
        if not await self.db.get(Venue, venue_id):
            raise NotFoundError("Venue", venue_id)

        conversation = Conversation(artist_id=artist_id, venue_id=venue_id)
        self.db.add(conversation)
        try:
            await self.db.commit()
        except IntegrityError:
            # Created concurrently by the other participant
            await self.db.rollback()
            conversation = await self._find_conversation(artist_id, venue_id)
            if conversation is None:
                raise
        return conversation

    async def _find_conversation(self, artist_id: UUID, venue_id: UUID) -> Optional[Conversation]:
        result = await self.db.execute(
            select(Conversation).where(
                Conversation.artist_id == artist_id,
                Conversation.venue_id == venue_id
            )
        )
        return result.scalar_one_or_none()

    async def get_conversation(self, conversation_id: UUID, user: User) -> Conversation:
        """
        Conversation visible to its two participants only
        """
        conversation = await self.db.get(Conversation, conversation_id)
        if not conversation:
            raise NotFoundError("Conversation", conversation_id)
        if not conversation.has_participant(user.id):
            raise AuthorizationError("Not a participant of this conversation")
        return conversation

    async def get_other_party(self, conversation: Conversation, user_type: SenderType):
        """Venue for an artist, artist for a venue; None if the profile is gone"""
        if user_type == SenderType.ARTIST:
            return await self.db.get(Venue, conversation.venue_id)
        return await self.db.get(Artist, conversation.artist_id)

    async def get_messages(self, conversation_id: UUID) -> List[Message]:
        result = await self.db.execute(
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at, Message.id)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def send_message(
        self,
        conversation_id: UUID,
        sender_id: UUID,
        sender_type: SenderType,
        content: str
    ) -> Message:
        """
        Store a message. The sender counts as having read it.
        """
        content = (content or "").strip()
        if not content:
            raise ValidationError("Message content cannot be empty", field="content")

        conversation = await self.db.get(Conversation, conversation_id)
        if not conversation:
            raise NotFoundError("Conversation", conversation_id)
        if not conversation.has_participant(sender_id):
            raise AuthorizationError("Not a participant of this conversation")

        async with db_manager.transaction(self.db):
            message = Message(
                conversation_id=conversation_id,
                sender_id=sender_id,
                sender_type=sender_type,
                content=content,
                reads=[MessageRead(user_id=sender_id)]
            )
            self.db.add(message)
            conversation.updated_at = utcnow()
            await self.db.flush()

        recipient_id = (
            conversation.venue_id if sender_id == conversation.artist_id else conversation.artist_id
        )
        await self.publisher.message_created(conversation_id, message.id, sender_id, recipient_id)
        return message

    async def mark_messages_as_read(self, conversation_id: UUID, reader_id: UUID) -> int:
        """
        Add a read receipt to every message from the other participant that
        the reader has not seen yet
        """
        result = await self.db.execute(
            select(Message.id).where(
                Message.conversation_id == conversation_id,
                Message.sender_id != reader_id,
                ~exists().where(
                    MessageRead.message_id == Message.id,
                    MessageRead.user_id == reader_id
                )
            )
        )
        message_ids = list(result.scalars().all())
        if not message_ids:
            return 0

        async with db_manager.transaction(self.db):
            self.db.add_all(
                MessageRead(message_id=message_id, user_id=reader_id)
                for message_id in message_ids
            )
        return len(message_ids)

    def _unread_clause(self, user_id: UUID):
        return and_(
            Message.sender_id != user_id,
            ~exists().where(
                MessageRead.message_id == Message.id,
                MessageRead.user_id == user_id
            )
        )

    async def get_unread_message_count(self, user_id: UUID, user_type: SenderType) -> int:
        """
        Messages in the user's conversations that someone else wrote and the
        user has not read
        """
        result = await self.db.execute(
            select(func.count(Message.id))
            .join(Conversation, Conversation.id == Message.conversation_id)
            .where(
                _participant_column(user_type) == user_id,
                self._unread_clause(user_id)
            )
        )
        return result.scalar_one()

    async def get_conversations_for_user(self, user_id: UUID, user_type: SenderType) -> List[Dict[str, Any]]:
        """
        Inbox: other party, last message and unread count per conversation,
        newest activity first; empty conversations last
        """
        result = await self.db.execute(
            select(Conversation).where(_participant_column(user_type) == user_id)
        )
        conversations = list(result.scalars().all())
        if not conversations:
            return []
        ids = [c.id for c in conversations]

        unread_rows = await self.db.execute(
            select(Message.conversation_id, func.count(Message.id))
            .where(Message.conversation_id.in_(ids), self._unread_clause(user_id))
            .group_by(Message.conversation_id)
        )
        unread = dict(unread_rows.all())

        latest = (
            select(Message.conversation_id, func.max(Message.created_at).label("last_at"))
            .where(Message.conversation_id.in_(ids))
            .group_by(Message.conversation_id)
            .subquery()
        )
        last_rows = await self.db.execute(
            select(Message).join(
                latest,
                and_(
                    Message.conversation_id == latest.c.conversation_id,
                    Message.created_at == latest.c.last_at
                )
            )
        )
        last_messages = {}
        for message in last_rows.scalars().all():
            last_messages.setdefault(message.conversation_id, message)

        other_model = Venue if user_type == SenderType.ARTIST else Artist
        other_ids = [c.venue_id if user_type == SenderType.ARTIST else c.artist_id for c in conversations]
        others_rows = await self.db.execute(select(other_model).where(other_model.id.in_(other_ids)))
        others = {profile.id: profile for profile in others_rows.scalars().all()}

        summaries = []
        for conversation, other_id in zip(conversations, other_ids):
            other = others.get(other_id)
            if other is None:
                logger.warning(f"Conversation {conversation.id} skipped: other party {other_id} no longer exists")
                continue
            data = conversation.dict()
            data["other_party"] = other
            data["last_message"] = last_messages.get(conversation.id)
            data["unread_count"] = unread.get(conversation.id, 0)
            summaries.append(data)

        with_messages = [s for s in summaries if s["last_message"] is not None]
        without_messages = [s for s in summaries if s["last_message"] is None]
        with_messages.sort(key=lambda s: s["last_message"].created_at, reverse=True)
        return with_messages + without_messages
