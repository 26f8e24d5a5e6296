"""
Session entity and its persisted record format.

The record is a JSON object with the four session attributes. Timestamps are
ISO-8601 with microsecond precision so expiry comparisons keep sub-second
ordering after a round trip through the store.
"""

from datetime import UTC, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator
from pydantic_core import PydanticSerializationError

from .errors import SessionDecodingError, SessionEncodingError


class Session(BaseModel):
    """A time-bounded authorization record scoped to one user."""

    model_config = ConfigDict(extra="ignore")

    id: str
    user_id: str
    start_time: datetime
    end_time: datetime

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # Naive timestamps cannot be compared against an aware clock
        if v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v

    @model_validator(mode="after")
    def end_after_start(self) -> "Session":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self

    def is_expired(self, now: datetime) -> bool:
        """True once ``now`` is strictly past ``end_time``."""
        return now > self.end_time


def encode_session(session: Session) -> bytes:
    """Serialize a session to its persisted JSON record."""
    try:
        return session.model_dump_json().encode("utf-8")
    except (PydanticSerializationError, ValueError, TypeError) as e:
        raise SessionEncodingError(session.id) from e


def decode_session(data: bytes, session_id: Optional[str] = None) -> Session:
    """
    Deserialize a persisted record.

    Args:
        data: Raw bytes (or str) read from the store
        session_id: Key the record was read from, for error reporting

    Raises:
        SessionDecodingError: If the record is not a valid session
    """
    try:
        return Session.model_validate_json(data)
    except ValidationError as e:
        raise SessionDecodingError(session_id) from e
