"""
Movie store for Movie Lobby.

Handles all database operations against the ``movies`` collection:
- Connection management with Motor (async MongoDB driver)
- Validation of writes against the collection schema
- Query construction for listing and searching
- Single-document create, update and delete by ID
"""

import logging
import re
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pydantic import ValidationError as PydanticValidationError
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from .config import Config
from .exceptions import (
    DatabaseConnectionError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from .models import Movie, MovieCreate, MovieUpdate
from .logging_config import setup_logger
from .utils import parse_object_id


def build_search_filter(query: Optional[str]) -> Dict[str, Any]:
    """
    Build the filter for a title-or-genre search.

    The query is matched literally and case-insensitively as a substring.
    An empty query yields an empty filter, which matches every movie.
    """
    if not query:
        return {}
    pattern = {"$regex": re.escape(query), "$options": "i"}
    return {"$or": [{"title": pattern}, {"genre": pattern}]}


def _error_list(exc: PydanticValidationError) -> List[Dict[str, str]]:
    """Reduce pydantic errors to JSON-safe field/message pairs."""
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        errors.append({"field": field, "message": err["msg"]})
    return errors


class MovieStore:
    """
    Persistence layer over the movies collection.

    Responsibilities:
    - Validate writes before they reach the database
    - Translate driver failures into StoreError
    - Map raw documents to Movie models
    """

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        client: Optional[AsyncIOMotorClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.collection = collection
        self.client = client
        self.logger = logger or logging.getLogger("movie_lobby.database")

    @classmethod
    def from_config(cls, config: Config) -> "MovieStore":
        """Create a store with its own Motor client, bounded by the configured timeout."""
        timeout = config.store_timeout_ms
        client = AsyncIOMotorClient(
            config.mongo_uri,
            serverSelectionTimeoutMS=timeout,
            connectTimeoutMS=timeout,
            socketTimeoutMS=timeout,
        )
        collection = client[config.db_name][config.collection_name]
        return cls(collection, client=client, logger=setup_logger("movie_lobby.database", config.log_dir))

    @contextmanager
    def _store_errors(self, operation: str) -> Iterator[None]:
        """Wrap driver failures raised inside the block in StoreError."""
        try:
            yield
        except PyMongoError as e:
            self.logger.error(f"{operation} failed: {e}", exc_info=True)
            raise StoreError(f"{operation} failed") from e

    # ============ CONNECTION ============

    async def ping(self) -> None:
        """Check that the database answers; raises DatabaseConnectionError if not."""
        try:
            await self.collection.database.command("ping")
        except PyMongoError as e:
            self.logger.error(f"Database ping failed: {e}")
            raise DatabaseConnectionError("Could not connect to the database") from e
        self.logger.info("Database connection established")

    def close(self) -> None:
        """Close the underlying client, if this store owns one."""
        if self.client is not None:
            self.client.close()

    # ============ READS ============

    def _to_movies(self, docs: List[Dict[str, Any]]) -> List[Movie]:
        """Map documents to movies, skipping any that no longer fit the schema."""
        movies = []
        for doc in docs:
            try:
                movies.append(Movie.from_document(doc))
            except PydanticValidationError as e:
                self.logger.warning(
                    f"Skipping malformed movie document id={doc.get('_id')}: {_error_list(e)}"
                )
        return movies

    async def list_all(self) -> List[Movie]:
        """Return every movie in store-native order."""
        with self._store_errors("list_all"):
            docs = await self.collection.find({}).to_list(length=None)
        return self._to_movies(docs)

    async def search(self, query: Optional[str]) -> List[Movie]:
        """Return movies whose title or genre contains the query, ignoring case."""
        with self._store_errors("search"):
            docs = await self.collection.find(build_search_filter(query)).to_list(length=None)
        return self._to_movies(docs)

    # ============ WRITES ============

    async def create(self, fields: Any) -> Movie:
        """
        Validate and insert a new movie.

        Raises:
            ValidationError: If a required field is missing or invalid.
                Nothing is written in that case.
        """
        try:
            movie = MovieCreate.model_validate(fields)
        except PydanticValidationError as e:
            raise ValidationError("Invalid data", errors=_error_list(e)) from e

        doc = movie.to_document()
        with self._store_errors("create"):
            result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        self.logger.info(f"Movie created: id={result.inserted_id} title={movie.title!r}")
        return Movie.from_document(doc)

    async def update_by_id(self, movie_id: str, fields: Any) -> Movie:
        """
        Apply a partial update and return the updated movie.

        Only the schema fields are updatable; unknown keys are dropped.

        Raises:
            ValidationError: If a provided field is invalid.
            NotFoundError: If no movie has this ID.
        """
        try:
            patch = MovieUpdate.model_validate(fields)
        except PydanticValidationError as e:
            raise ValidationError("Invalid data", errors=_error_list(e)) from e

        oid = parse_object_id(movie_id)
        if oid is None:
            raise NotFoundError(movie_id)

        updates = patch.to_update()
        with self._store_errors("update_by_id"):
            if updates:
                doc = await self.collection.find_one_and_update(
                    {"_id": oid},
                    {"$set": updates},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                doc = await self.collection.find_one({"_id": oid})

        if doc is None:
            raise NotFoundError(movie_id)
        self.logger.info(f"Movie updated: id={movie_id} fields={sorted(updates)}")
        return Movie.from_document(doc)

    async def delete_by_id(self, movie_id: str) -> None:
        """
        Delete a movie irrevocably.

        Raises:
            NotFoundError: If no movie has this ID.
        """
        oid = parse_object_id(movie_id)
        if oid is None:
            raise NotFoundError(movie_id)

        with self._store_errors("delete_by_id"):
            doc = await self.collection.find_one_and_delete({"_id": oid})

        if doc is None:
            raise NotFoundError(movie_id)
        self.logger.info(f"Movie deleted: id={movie_id}")
