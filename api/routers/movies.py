"""
Movie lobby endpoints.

Listing and search are public; add, update and delete require an
admin bearer token.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from api.auth import require_admin
from api.dependencies import get_store
from api.exceptions import BadRequestError, NotFoundError, ServerError
from api.schemas.common import ErrorResponse, MessageResponse
from movie_lobby import exceptions as store_errors
from movie_lobby.database import MovieStore
from movie_lobby.models import Movie

router = APIRouter()
logger = logging.getLogger("api.movies")

ADMIN_ERRORS = {
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    403: {"model": ErrorResponse, "description": "Token lacks the admin role"},
}
SERVER_ERROR = {500: {"model": ErrorResponse, "description": "Database failure"}}


def _invalid(exc: store_errors.ValidationError) -> BadRequestError:
    return BadRequestError(exc.message, details={"errors": exc.errors})


@router.get("/movies", response_model=List[Movie], responses=SERVER_ERROR)
async def list_movies(store: MovieStore = Depends(get_store)):
    """
    List all movies in the lobby.
    """
    try:
        return await store.list_all()
    except store_errors.StoreError:
        raise ServerError()


@router.get("/search", response_model=List[Movie], responses=SERVER_ERROR)
async def search_movies(
    q: Optional[str] = Query(None, description="Text to match against title or genre"),
    store: MovieStore = Depends(get_store),
):
    """
    Search movies by title or genre.

    Matching is a case-insensitive substring match; an empty or
    missing query returns every movie.
    """
    try:
        return await store.search(q or "")
    except store_errors.StoreError:
        raise ServerError()


@router.post(
    "/movies",
    response_model=Movie,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={**ADMIN_ERRORS, 400: {"model": ErrorResponse}},
)
async def add_movie(
    payload: Dict[str, Any] = Body(..., description="title, genre, rating, streamingLink"),
    store: MovieStore = Depends(get_store),
):
    """
    Add a new movie to the lobby.
    """
    try:
        return await store.create(payload)
    except store_errors.ValidationError as e:
        logger.warning(f"Add movie rejected: {e.errors}")
        raise _invalid(e)
    except store_errors.StoreError:
        raise ServerError()


@router.put(
    "/movies/{movie_id}",
    response_model=Movie,
    dependencies=[Depends(require_admin)],
    responses={**ADMIN_ERRORS, 400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_movie(
    movie_id: str,
    payload: Dict[str, Any] = Body(..., description="Any subset of the movie fields"),
    store: MovieStore = Depends(get_store),
):
    """
    Update an existing movie's details.

    Only title, genre, rating and streamingLink can be changed;
    other keys are ignored.
    """
    try:
        return await store.update_by_id(movie_id, payload)
    except store_errors.ValidationError as e:
        logger.warning(f"Update movie rejected: id={movie_id} {e.errors}")
        raise _invalid(e)
    except store_errors.NotFoundError:
        raise NotFoundError("Movie", movie_id)
    except store_errors.StoreError:
        raise ServerError()


@router.delete(
    "/movies/{movie_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
    responses={**ADMIN_ERRORS, 404: {"model": ErrorResponse}, **SERVER_ERROR},
)
async def delete_movie(
    movie_id: str,
    store: MovieStore = Depends(get_store),
):
    """
    Delete a movie from the lobby.
    """
    try:
        await store.delete_by_id(movie_id)
    except store_errors.NotFoundError:
        raise NotFoundError("Movie", movie_id)
    except store_errors.StoreError:
        raise ServerError()
    return MessageResponse(message="Movie deleted successfully")
