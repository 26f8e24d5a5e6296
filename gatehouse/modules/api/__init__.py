"""
API Module - Black Box Interface

Purpose: Request and response models for the HTTP layer
"""

from .models import CreateSessionRequest, ErrorResponse, SessionResponse

__all__ = ["CreateSessionRequest", "ErrorResponse", "SessionResponse"]
