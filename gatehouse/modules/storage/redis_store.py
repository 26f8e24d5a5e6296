import logging
from datetime import timedelta

from redis.exceptions import RedisError

from .base import KeyNotFoundError, StorageError, ttl_milliseconds

logger = logging.getLogger(__name__)


class RedisStore:
    def __init__(self, redis_client):
        """
        Initialize the Redis-backed store.

        Args:
            redis_client: Async Redis client (``redis.asyncio.Redis``)
        """
        self.redis = redis_client

    async def get(self, key: str) -> bytes:
        try:
            data = await self.redis.get(key)
        except RedisError as e:
            raise StorageError(f"redis GET failed for {key}: {e}") from e

        if data is None:
            raise KeyNotFoundError(key)

        if isinstance(data, str):
            data = data.encode("utf-8")
        return data

    async def set(self, key: str, value: bytes, ttl: timedelta) -> None:
        """
        Store value with a millisecond TTL.

        PX is used rather than EX so sub-second durations are not rounded
        up to a full second.
        """
        px = ttl_milliseconds(ttl)
        try:
            await self.redis.set(key, value, px=px)
        except RedisError as e:
            raise StorageError(f"redis SET failed for {key}: {e}") from e

    async def delete(self, key: str) -> int:
        try:
            return int(await self.redis.delete(key))
        except RedisError as e:
            raise StorageError(f"redis DEL failed for {key}: {e}") from e

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False
