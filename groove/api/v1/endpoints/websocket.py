"""
WebSocket endpoints for real-time updates

Clients authenticate with `?token=<access token>` and receive the events
published on Redis for the channel they are allowed to watch. They refetch
over HTTP when an event arrives.
"""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from uuid import UUID
import asyncio
import logging

from groove.config import settings
from groove.core.database import async_session
from groove.core.exceptions import GrooveException
from groove.core.redis import get_redis
from groove.core.security import authenticate_token
from groove.models.chat import Conversation
from groove.services.realtime_service import conversation_channel, manager, user_channel

logger = logging.getLogger(__name__)
router = APIRouter()


async def _relay(websocket: WebSocket, redis_client, channel: str):
    """
    Forward pub/sub messages on `channel` to the socket and answer pings
    until the client goes away
    """
    pubsub = redis_client.pubsub()
    await pubsub.subscribe(channel)
    await manager.connect(websocket, channel)

    try:
        while True:
            message = await pubsub.get_message(ignore_subscribe_messages=True)
            if message and message["type"] == "message":
                await websocket.send_text(message["data"])

            try:
                client_message = await asyncio.wait_for(
                    websocket.receive_text(),
                    timeout=settings.WS_POLL_INTERVAL
                )
                if client_message == "ping":
                    await websocket.send_text("pong")
            except asyncio.TimeoutError:
                pass

    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket, channel)
        await pubsub.unsubscribe(channel)
        await pubsub.aclose()


@router.websocket("/conversations/{conversation_id}")
async def websocket_conversation(websocket: WebSocket, conversation_id: UUID, token: str = None):
    """
    New-message events for one conversation; participants only
    """
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Missing authentication")
        return

    redis_client = await get_redis()
    async with async_session() as db:
        try:
            user = await authenticate_token(token, db, redis_client)
            conversation = await db.get(Conversation, conversation_id)
        except GrooveException as e:
            logger.info(f"WebSocket rejected for conversation {conversation_id}: {e}")
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Invalid authentication")
            return

    if conversation is None or not conversation.has_participant(user.id):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Not a participant")
        return

    await _relay(websocket, redis_client, conversation_channel(conversation.id))


@router.websocket("/notifications")
async def websocket_notifications(websocket: WebSocket, token: str = None):
    """
    Personal events: unread badge refreshes and matching open gigs
    """
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Missing authentication")
        return

    redis_client = await get_redis()
    async with async_session() as db:
        try:
            user = await authenticate_token(token, db, redis_client)
        except GrooveException as e:
            logger.info(f"Notification WebSocket rejected: {e}")
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Invalid authentication")
            return

    await _relay(websocket, redis_client, user_channel(user.id))
