"""
Common schemas shared across API endpoints.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


class HealthResponse(BaseModel):
    """Liveness check response."""

    status: str = "ok"
