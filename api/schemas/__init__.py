"""Pydantic schemas for API request and response validation."""

from api.schemas.common import ErrorResponse, HealthResponse, MessageResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "MessageResponse",
]
