import asyncio
import logging
import uuid
from datetime import UTC, datetime
from typing import Awaitable, Callable, NoReturn, Optional, Type

from ...config.provider import SessionConfig
from ..storage.base import KeyNotFoundError, KeyValueStore, StorageError
from .errors import (
    SessionDecodingError,
    SessionEncodingError,
    SessionExpiredError,
    SessionNotFoundError,
    SessionStoreError,
    StoreDeleteError,
    StoreReadError,
    StoreWriteError,
)
from .models import Session, decode_session, encode_session


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionModule:
    def __init__(
        self,
        store: KeyValueStore,
        session_config: SessionConfig,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize session module.

        Args:
            store: TTL key-value store holding session records
            session_config: Base duration, token secret and extension policy
            logger: Logger to report through (defaults to this module's logger)
            clock: Returns the current aware UTC time
        """
        self.store = store
        self.config = session_config
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock or _utcnow

    @property
    def base_duration(self):
        return self.config.base_duration

    async def create_session(self, user_id: str, *, timeout: Optional[float] = None) -> str:
        """
        Create a new session for a user.

        Args:
            user_id: Owning principal, stored as given
            timeout: Optional bound in seconds on the store round-trip

        Returns:
            Session ID (UUID)

        Raises:
            SessionEncodingError: If the record cannot be serialized
            StoreWriteError: If the store write fails or times out
        """
        session = await self.start_session(user_id, timeout=timeout)
        return session.id

    async def start_session(self, user_id: str, *, timeout: Optional[float] = None) -> Session:
        """Like create_session, but return the stored session itself."""
        now = self.clock()
        session = Session(
            id=str(uuid.uuid4()),
            user_id=user_id,
            start_time=now,
            end_time=now + self.base_duration,
        )

        await self._save(session, timeout)
        return session

    async def check_session(self, session_id: str, *, timeout: Optional[float] = None) -> Session:
        """
        Return the live session stored under session_id.

        A record whose end_time has passed is deleted and reported as
        expired; this guards against store TTL drift. The session itself is
        never modified.

        Raises:
            SessionNotFoundError: No record under session_id
            SessionDecodingError: Stored record is corrupt
            SessionExpiredError: Record found but past its end_time
            StoreReadError / StoreDeleteError: Store failures
        """
        session = await self._load(session_id, timeout)

        if session.is_expired(self.clock()):
            await self._expire(session_id, timeout)

        return session

    async def extend_session(self, session_id: str, *, timeout: Optional[float] = None) -> None:
        """
        Push the session's end_time to now + base duration.

        Unless extend_expired is configured, a record that has already
        passed its end_time is expired exactly as check_session would, not
        resurrected.

        Raises:
            SessionNotFoundError, SessionDecodingError, StoreReadError: from the read
            SessionExpiredError, StoreDeleteError: when the record has expired
            SessionEncodingError, StoreWriteError: from the write
        """
        session = await self._load(session_id, timeout)

        now = self.clock()
        if not self.config.extend_expired and session.is_expired(now):
            await self._expire(session_id, timeout)

        session.end_time = now + self.base_duration

        try:
            await self._save(session, timeout)
        except StoreWriteError:
            self.logger.error(f"Failed update session end time for {session_id}")
            raise

    async def _expire(self, session_id: str, timeout: Optional[float]) -> NoReturn:
        """Delete an expired record and raise SessionExpiredError."""
        await self._call(
            self.store.delete(session_id), StoreDeleteError, session_id, timeout, "delete"
        )
        self.logger.info(f"Session {session_id} expired and was deleted")
        raise SessionExpiredError(session_id)

    async def _save(self, session: Session, timeout: Optional[float]) -> None:
        try:
            payload = encode_session(session)
        except SessionEncodingError:
            self.logger.error(f"Failed encode session {session.id} to JSON", exc_info=True)
            raise

        await self._call(
            self.store.set(session.id, payload, self.base_duration),
            StoreWriteError,
            session.id,
            timeout,
            "save",
        )
        self.logger.info(f"Session {session.id} saved to store successfully")

    async def _load(self, session_id: str, timeout: Optional[float]) -> Session:
        try:
            data = await self._call(
                self.store.get(session_id), StoreReadError, session_id, timeout, "get"
            )
        except SessionNotFoundError:
            self.logger.error(f"Session {session_id} not found in store")
            raise

        self.logger.info(f"Session {session_id} got from store successfully")

        try:
            session = decode_session(data, session_id)
        except SessionDecodingError:
            self.logger.error(f"Failed decode session {session_id} from JSON", exc_info=True)
            raise

        # A record stored under another session's key is corrupt
        if session.id != session_id:
            self.logger.error(
                f"Session record under {session_id} carries mismatched id {session.id}"
            )
            raise SessionDecodingError(session_id)

        return session

    async def _call(
        self,
        operation: Awaitable,
        error_cls: Type[SessionStoreError],
        session_id: str,
        timeout: Optional[float],
        action: str,
    ):
        """
        Await a store operation, translating its failures.

        Cancellation propagates unchanged; a timeout surfaces as error_cls.
        """
        try:
            async with asyncio.timeout(timeout):
                return await operation
        except KeyNotFoundError:
            raise SessionNotFoundError(session_id) from None
        except (StorageError, TimeoutError) as e:
            self.logger.error(
                f"Failed {action} session {session_id} in store: {e!r}"
            )
            raise error_cls(session_id) from e
