"""
Custom exceptions and error handlers for the API.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("api")


class APIError(HTTPException):
    """Base API error with structured error response."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error = error
        self.message = message
        self.details = details
        super().__init__(status_code=status_code, detail=message, headers=headers)


class UnauthenticatedError(APIError):
    """Missing, malformed, expired or badly signed bearer token."""

    def __init__(self):
        super().__init__(
            status_code=401,
            error="unauthorized",
            message="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(APIError):
    """Valid token without the admin role."""

    def __init__(self):
        super().__init__(
            status_code=403,
            error="forbidden",
            message="Forbidden",
        )


class BadRequestError(APIError):
    """Request body failed validation."""

    def __init__(self, message: str = "Invalid data", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            status_code=400,
            error="invalid_data",
            message=message,
            details=details,
        )


class NotFoundError(APIError):
    """Resource not found error."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            status_code=404,
            error="not_found",
            message=f"{resource} not found",
            details={"resource": resource, "id": identifier},
        )


class ServerError(APIError):
    """Unexpected store failure."""

    def __init__(self, message: str = "Server error"):
        super().__init__(
            status_code=500,
            error="server_error",
            message=message,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions and return structured JSON response."""
    content = {
        "error": exc.error,
        "message": exc.message,
    }
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method) in the API shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": "http_error",
            "message": str(exc.detail),
        },
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are reported as 400 rather than 422."""
    errors = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={
            "error": "invalid_data",
            "message": "Invalid data",
            "details": {"errors": errors},
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc!r}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
        },
    )
