"""
Chat endpoints between artists and venues
"""

from typing import Any, List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from groove.core.database import get_session
from groove.core.redis import RedisManager, get_redis_manager
from groove.core.security import get_current_user
from groove.models.chat import SenderType
from groove.models.user import User
from groove.schemas.chat import (
    ChatMessageResponse,
    ConversationDetail,
    ConversationResponse,
    ConversationStart,
    ConversationSummary,
    MarkedReadResponse,
    MessageCreate,
    UnreadCountResponse,
)
from groove.services.chat_service import ChatService, sender_type_for
from groove.services.realtime_service import RealtimePublisher

router = APIRouter()


@router.post("", response_model=ConversationResponse, status_code=status.HTTP_201_CREATED)
async def start_conversation(
    start: ConversationStart,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    """
    Open the conversation with a venue (as an artist) or an artist (as a
    venue). An existing conversation is returned as is.
    """
    user_type = sender_type_for(current_user)
    if user_type == SenderType.ARTIST:
        artist_id, venue_id = current_user.id, start.counterpart_id
    else:
        artist_id, venue_id = start.counterpart_id, current_user.id
    return await ChatService(db).find_or_create_conversation(artist_id, venue_id)


@router.get("", response_model=List[ConversationSummary])
async def my_conversations(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    return await ChatService(db).get_conversations_for_user(current_user.id, sender_type_for(current_user))


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    count = await ChatService(db).get_unread_message_count(current_user.id, sender_type_for(current_user))
    return {"unread_count": count}


@router.get("/{conversation_id}", response_model=ConversationDetail)
async def get_conversation(
    conversation_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    service = ChatService(db)
    conversation = await service.get_conversation(conversation_id, current_user)
    data = conversation.dict()
    data["other_party"] = await service.get_other_party(conversation, sender_type_for(current_user))
    data["messages"] = await service.get_messages(conversation.id)
    return data


@router.get("/{conversation_id}/messages", response_model=List[ChatMessageResponse])
async def list_messages(
    conversation_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    service = ChatService(db)
    conversation = await service.get_conversation(conversation_id, current_user)
    return await service.get_messages(conversation.id)


@router.post(
    "/{conversation_id}/messages",
    response_model=ChatMessageResponse,
    status_code=status.HTTP_201_CREATED
)
async def send_message(
    conversation_id: UUID,
    message_data: MessageCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
    redis_manager: RedisManager = Depends(get_redis_manager)
) -> Any:
    """
    Send a message. Subscribers of the conversation and the recipient's
    badge channel are notified.
    """
    service = ChatService(db, RealtimePublisher(redis_manager))
    return await service.send_message(
        conversation_id,
        current_user.id,
        sender_type_for(current_user),
        message_data.content
    )


@router.post("/{conversation_id}/read", response_model=MarkedReadResponse)
async def mark_as_read(
    conversation_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session)
) -> Any:
    service = ChatService(db)
    conversation = await service.get_conversation(conversation_id, current_user)
    marked = await service.mark_messages_as_read(conversation.id, current_user.id)
    return {"conversation_id": conversation.id, "marked": marked}
