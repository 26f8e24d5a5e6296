"""
Gatehouse API data models.

These models define the request and response bodies of the HTTP layer.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..session import Session


class CreateSessionRequest(BaseModel):
    """Request to create a session."""

    user_id: str = Field(..., description="Identifier of the owning user", min_length=1)


class SessionResponse(BaseModel):
    """Session details."""

    session_id: str = Field(..., description="Session identifier")
    user_id: str = Field(..., description="Owning user")
    start_time: datetime = Field(..., description="Creation time (UTC)")
    end_time: datetime = Field(..., description="Time the session stops being valid (UTC)")

    @classmethod
    def from_session(cls, session: Session) -> "SessionResponse":
        return cls(
            session_id=session.id,
            user_id=session.user_id,
            start_time=session.start_time,
            end_time=session.end_time,
        )


class ErrorResponse(BaseModel):
    """Error body returned for failed requests."""

    error: str
    session_id: Optional[str] = None
