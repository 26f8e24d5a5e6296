"""
Session Module - Black Box Interface

Purpose: Manage authentication session lifecycle
Interface: create_session(), check_session(), extend_session()
Hidden: Record encoding, TTL management, expiry cleanup

Replaceable with any session backend that honours the same error taxonomy.
"""

from .errors import (
    SessionDecodingError,
    SessionEncodingError,
    SessionError,
    SessionExpiredError,
    SessionNotFoundError,
    SessionStoreError,
    StoreDeleteError,
    StoreReadError,
    StoreWriteError,
)
from .models import Session, decode_session, encode_session
from .session import SessionModule

__all__ = [
    "Session",
    "SessionDecodingError",
    "SessionEncodingError",
    "SessionError",
    "SessionExpiredError",
    "SessionModule",
    "SessionNotFoundError",
    "SessionStoreError",
    "StoreDeleteError",
    "StoreReadError",
    "StoreWriteError",
    "decode_session",
    "encode_session",
]
