"""
Movie Lobby - a small catalog of movies backed by MongoDB.

This package provides:
- Environment-driven configuration
- The movie collection schema and validation
- An async store for listing, searching and editing movies
- Bearer token verification
"""

from .config import Config
from .database import MovieStore, build_search_filter
from .exceptions import (
    ConfigError,
    DatabaseConnectionError,
    MovieLobbyError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from .models import Movie, MovieCreate, MovieUpdate

__version__ = "1.0.0"
__all__ = [
    "Config",
    "MovieStore",
    "build_search_filter",
    "ConfigError",
    "DatabaseConnectionError",
    "MovieLobbyError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
    "Movie",
    "MovieCreate",
    "MovieUpdate",
]
