"""In-memory key-value store for development and tests."""

import time
from datetime import timedelta
from typing import Callable, Dict, Tuple

from .base import KeyNotFoundError, ttl_milliseconds


class InMemoryStore:
    """
    Dict-backed store with lazy TTL eviction.

    Args:
        clock: Monotonic clock in seconds; injectable so tests control eviction
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._data: Dict[str, Tuple[bytes, float]] = {}

    def _expired(self, key: str) -> bool:
        _, expires_at = self._data[key]
        return self._clock() >= expires_at

    def _purge(self) -> None:
        for key in [k for k in self._data if self._expired(k)]:
            del self._data[key]

    async def get(self, key: str) -> bytes:
        if key not in self._data:
            raise KeyNotFoundError(key)
        if self._expired(key):
            del self._data[key]
            raise KeyNotFoundError(key)
        return self._data[key][0]

    async def set(self, key: str, value: bytes, ttl: timedelta) -> None:
        expires_at = self._clock() + ttl_milliseconds(ttl) / 1000
        self._purge()
        self._data[key] = (bytes(value), expires_at)

    async def delete(self, key: str) -> int:
        if key in self._data:
            expired = self._expired(key)
            del self._data[key]
            return 0 if expired else 1
        return 0

    async def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        return sum(1 for key in list(self._data) if not self._expired(key))
