"""
Storage Module - Black Box Interface

Purpose: Abstract session persistence behind a TTL key-value contract
Interface: connect(), disconnect(), KeyValueStore.get/set/delete
Hidden: Redis specifics, connection setup, TTL units

Can be replaced with any TTL-capable backend without affecting other modules.
"""

import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ...config.provider import RedisConfig
from .base import (
    KeyNotFoundError,
    KeyValueStore,
    StorageConnectionError,
    StorageError,
)
from .memory import InMemoryStore
from .redis_store import RedisStore

logger = logging.getLogger(__name__)


class StorageModule:
    """Builds and owns the Redis connection behind a RedisStore."""

    def __init__(self, redis_config: RedisConfig):
        """Initialize storage with Redis connection settings."""
        self.config = redis_config
        self._client: Optional[redis.Redis] = None

    @property
    def url(self) -> str:
        # Password is passed separately to avoid URL encoding issues
        return f"redis://{self.config.host}:{self.config.port}/{self.config.db}"

    async def connect(self) -> RedisStore:
        """
        Create the Redis client and verify it answers PING.

        Raises:
            StorageConnectionError: If Redis is unreachable
        """
        if not self._client:
            self._client = redis.from_url(self.url, password=self.config.password)

        try:
            await self._client.ping()
        except (RedisError, OSError) as e:
            logger.error(f"Failed to connect to Redis at {self.config.host}:{self.config.port}: {e}")
            await self.disconnect()
            raise StorageConnectionError("failed to connect to redis") from e

        logger.info(f"Connected to Redis at {self.config.host}:{self.config.port}/{self.config.db}")
        return RedisStore(self._client)

    async def disconnect(self):
        """Close storage connection."""
        if self._client:
            await self._client.aclose()
            self._client = None


__all__ = [
    "InMemoryStore",
    "KeyNotFoundError",
    "KeyValueStore",
    "RedisStore",
    "StorageConnectionError",
    "StorageError",
    "StorageModule",
]
