"""
Shared pytest fixtures for Gatehouse tests.

This module provides common fixtures including:
- FakeClock: controllable wall clock for expiry tests
- Redis mocks for storage adapter tests
- Session module wiring over an in-memory store
"""

import os
import sys
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gatehouse.config.provider import APIConfig, RedisConfig, SessionConfig
from gatehouse.modules.session import SessionModule
from gatehouse.modules.storage import InMemoryStore


# =============================================================================
# Clock
# =============================================================================

class FakeClock:
    """
    Wall clock that only moves when told to.

    Usage:
        def test_expiry(clock, session_module):
            clock.advance(timedelta(minutes=11))
    """

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> datetime:
        self.now = self.now + delta
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class StaticConfigProvider:
    """Config provider returning fixed values, for wiring the app in tests."""
    session: SessionConfig
    redis: RedisConfig = None
    api: APIConfig = None

    def get_session_config(self) -> SessionConfig:
        return self.session

    def get_redis_config(self) -> RedisConfig:
        return self.redis or RedisConfig(host="localhost", port=6379, db=0)

    def get_api_config(self) -> APIConfig:
        return self.api or APIConfig(host="127.0.0.1", port=8080)


@pytest.fixture
def session_config():
    return SessionConfig(base_duration=timedelta(minutes=10), token_secret="test_token")


# =============================================================================
# Storage
# =============================================================================

@pytest.fixture
def memory_store():
    """In-memory store whose TTL clock never advances, so only the session
    module's expiry check can expire a record."""
    return InMemoryStore(clock=lambda: 0.0)


@pytest.fixture
def mock_store():
    """KeyValueStore double for asserting individual store calls."""
    store = AsyncMock()
    store.get = AsyncMock()
    store.set = AsyncMock(return_value=None)
    store.delete = AsyncMock(return_value=1)
    store.ping = AsyncMock(return_value=True)
    return store


@pytest.fixture
def mock_redis():
    """Create a mock async Redis client."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.ping = AsyncMock(return_value=True)
    redis.aclose = AsyncMock()
    return redis


# =============================================================================
# Session module
# =============================================================================

@pytest.fixture
def session_module(memory_store, session_config, clock):
    return SessionModule(memory_store, session_config, clock=clock)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring infrastructure"
    )
