"""
Movie Lobby REST API.

FastAPI application exposing the movie catalog: public listing and
search, admin-only create, update and delete.
"""

from api.main import app, create_app

__all__ = ["app", "create_app"]
