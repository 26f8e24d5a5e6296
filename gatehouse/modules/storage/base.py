"""Key-value store contract and storage errors."""

from datetime import timedelta
from typing import Protocol


class StorageError(Exception):
    """Transport or availability failure of the backing store."""


class KeyNotFoundError(StorageError):
    """The key is absent or has been evicted."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"key not found: {key}")


class StorageConnectionError(StorageError):
    """The backing store could not be reached at startup."""


class KeyValueStore(Protocol):
    """Protocol for TTL-capable key-value stores."""

    async def get(self, key: str) -> bytes:
        """
        Read the value stored under key.

        Raises:
            KeyNotFoundError: If the key is absent or expired
            StorageError: On transport failure
        """
        ...

    async def set(self, key: str, value: bytes, ttl: timedelta) -> None:
        """Store value under key; the store may evict it after ttl."""
        ...

    async def delete(self, key: str) -> int:
        """Delete key, returning the number of keys removed (0 if absent)."""
        ...

    async def ping(self) -> bool:
        """Check the store is reachable."""
        ...


def ttl_milliseconds(ttl: timedelta) -> int:
    """Convert a positive TTL to whole milliseconds, never below 1."""
    if ttl <= timedelta(0):
        raise ValueError(f"ttl must be positive, got {ttl}")
    return max(1, int(ttl.total_seconds() * 1000))
