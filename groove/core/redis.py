"""
Redis configuration and connection management
"""

import redis.asyncio as redis
from typing import Optional, Any
from fastapi import Depends
import json
import logging

from groove.config import settings

logger = logging.getLogger(__name__)

# Global Redis client
redis_client: Optional[redis.Redis] = None


async def init_redis():
    """
    Initialize Redis connection
    """
    global redis_client
    try:
        redis_client = redis.from_url(
            settings.REDIS_URL,
            max_connections=settings.REDIS_MAX_CONNECTIONS,
            decode_responses=True
        )
        await redis_client.ping()
        logger.info("Redis connection established")
    except Exception as e:
        logger.error(f"Failed to connect to Redis: {e}")
        raise


async def close_redis():
    """
    Close Redis connection
    """
    global redis_client
    if redis_client:
        await redis_client.aclose()
        redis_client = None
        logger.info("Redis connection closed")


async def get_redis() -> redis.Redis:
    """
    Get Redis client
    """
    if not redis_client:
        await init_redis()
    return redis_client


class RedisManager:
    """
    Thin JSON-aware wrapper around a Redis client.
    Used for the commission-rate cache, the token blacklist and pub/sub.
    """

    def __init__(self, client: redis.Redis):
        self.client = client
        self.logger = logging.getLogger(__name__)

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        value = await self.client.get(key)
        if value is None:
            return None
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            return value

    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None
    ) -> bool:
        """Set value in cache with optional TTL"""
        if not isinstance(value, str):
            value = json.dumps(value, default=str)

        if ttl:
            return await self.client.setex(key, ttl, value)
        return await self.client.set(key, value)

    async def delete(self, key: str) -> bool:
        """Delete key from cache"""
        return await self.client.delete(key) > 0

    # Pub/Sub for realtime events
    async def publish(self, channel: str, message: Any) -> int:
        """Publish message to channel"""
        if not isinstance(message, str):
            message = json.dumps(message, default=str)
        return await self.client.publish(channel, message)


async def get_redis_manager(client: redis.Redis = Depends(get_redis)) -> RedisManager:
    """
    Dependency wrapping the shared client
    """
    return RedisManager(client)
