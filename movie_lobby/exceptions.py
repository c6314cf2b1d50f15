"""
Domain exceptions for Movie Lobby.

Raised by the store and configuration layers; the API layer maps them
to HTTP responses.
"""

from typing import Any, Dict, List, Optional


class MovieLobbyError(Exception):
    """Base class for all Movie Lobby errors."""


class ConfigError(MovieLobbyError, ValueError):
    """Required configuration is missing or malformed."""


class ValidationError(MovieLobbyError):
    """Movie fields failed schema validation."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class NotFoundError(MovieLobbyError):
    """No movie exists with the given ID."""

    def __init__(self, movie_id: str):
        super().__init__(f"Movie with ID {movie_id} not found")
        self.movie_id = movie_id


class StoreError(MovieLobbyError):
    """Unexpected failure in the underlying database."""


class DatabaseConnectionError(StoreError):
    """The database could not be reached at startup."""
