"""Session lifecycle errors.

Every failure is raised typed by kind so the calling layer can map it to a
user-visible outcome (not found / expired -> re-authenticate, store failure
-> service unavailable). Nothing here is retried internally.
"""

from typing import Optional


class SessionError(Exception):
    """Base class for all session lifecycle failures."""

    message = "session error"

    def __init__(self, session_id: Optional[str] = None, message: Optional[str] = None):
        self.session_id = session_id
        super().__init__(message or self.message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.session_id:
            return f"{base} (session_id={self.session_id})"
        return base


class SessionNotFoundError(SessionError):
    """No record exists under the session key."""

    message = "session not found"


class SessionExpiredError(SessionError):
    """A record was found but its validity window has passed."""

    message = "session is expired"


class SessionEncodingError(SessionError):
    """The session could not be serialized."""

    message = "failed to encode session"


class SessionDecodingError(SessionError):
    """The stored record could not be deserialized."""

    message = "failed to decode session"


class SessionStoreError(SessionError):
    """Transport or availability failure of the key-value store."""

    message = "session store error"


class StoreReadError(SessionStoreError):
    message = "failed to read session from store"


class StoreWriteError(SessionStoreError):
    message = "failed to write session to store"


class StoreDeleteError(SessionStoreError):
    message = "failed to delete session from store"
