"""
Realtime notifications over Redis pub/sub

Writes publish small "something changed" events. WebSocket relays forward
them to connected clients, which refetch instead of merging state.
"""

from fastapi import WebSocket
from typing import Dict, Optional, Set
from datetime import datetime, timezone
import logging

from groove.core.redis import RedisManager

logger = logging.getLogger(__name__)

MESSAGE_CREATED = "message.created"
BADGE_REFRESH = "badge.refresh"
GIG_OPENED = "gig.opened"


def conversation_channel(conversation_id) -> str:
    return f"conversation:{conversation_id}"


def user_channel(user_id) -> str:
    return f"user:{user_id}"


class RealtimePublisher:
    """
    Publishes domain events. A failed publish is logged and swallowed so it
    never undoes the write that triggered it.
    """

    def __init__(self, redis_manager: Optional[RedisManager]):
        self.redis_manager = redis_manager

    async def publish(self, channel: str, event_type: str, payload: Optional[Dict] = None) -> bool:
        if self.redis_manager is None:
            return False

        message = {
            "type": event_type,
            "data": payload or {},
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
        try:
            await self.redis_manager.publish(channel, message)
            return True
        except Exception as e:
            logger.error(f"Realtime publish to {channel} failed: {e}")
            return False

    async def message_created(self, conversation_id, message_id, sender_id, recipient_id):
        await self.publish(
            conversation_channel(conversation_id),
            MESSAGE_CREATED,
            {
                "conversation_id": str(conversation_id),
                "message_id": str(message_id),
                "sender_id": str(sender_id)
            }
        )
        await self.publish(
            user_channel(recipient_id),
            BADGE_REFRESH,
            {"conversation_id": str(conversation_id)}
        )

    async def gig_opened(self, gig_id, artist_ids):
        for artist_id in artist_ids:
            await self.publish(user_channel(artist_id), GIG_OPENED, {"gig_id": str(gig_id)})


class ConnectionManager:
    """Tracks WebSocket connections per channel on this instance"""

    def __init__(self):
        self.active_connections: Dict[str, Set[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, channel: str):
        await websocket.accept()
        self.active_connections.setdefault(channel, set()).add(websocket)
        logger.info(f"Client connected to {channel}")

        await websocket.send_json({
            "type": "connection",
            "status": "connected",
            "channel": channel,
            "timestamp": datetime.now(timezone.utc).isoformat()
        })

    def disconnect(self, websocket: WebSocket, channel: str):
        connections = self.active_connections.get(channel)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            del self.active_connections[channel]
        logger.info(f"Client disconnected from {channel}")

    def connection_count(self, channel: Optional[str] = None) -> int:
        if channel is not None:
            return len(self.active_connections.get(channel, ()))
        return sum(len(c) for c in self.active_connections.values())


manager = ConnectionManager()
