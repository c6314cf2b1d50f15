"""
Dependency injection for the API.

The config and the movie store are built once at startup and held on
``app.state``; handlers receive them through these dependencies.
"""

from fastapi import Request

from movie_lobby.config import Config
from movie_lobby.database import MovieStore


def get_config(request: Request) -> Config:
    """Get the configuration the app was started with."""
    return request.app.state.config


def get_store(request: Request) -> MovieStore:
    """Get the movie store opened at startup."""
    return request.app.state.store
