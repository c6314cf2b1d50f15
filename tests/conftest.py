"""
Shared fixtures for Movie Lobby tests.

Provides an in-memory Motor collection, sample data, JWT helpers and
an API client wired to the real MovieStore.
"""

import re
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import jwt
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument
from pymongo.errors import ServerSelectionTimeoutError

from movie_lobby.config import Config
from movie_lobby.database import MovieStore

TEST_SECRET = "test-secret-key-for-movie-lobby-0001"


# =============================================================================
# SAMPLE DATA
# =============================================================================

def create_sample_movie(
    title: str,
    genre: str = "Drama",
    rating: float = 7.5,
    streaming_link: Optional[str] = None,
) -> Dict[str, Any]:
    """Create a movie payload as a client would send it."""
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return {
        "title": title,
        "genre": genre,
        "rating": rating,
        "streamingLink": streaming_link or f"https://stream.example.com/{slug}",
    }


SAMPLE_MOVIES = [
    create_sample_movie("Inception", "Sci-Fi", 8.8),
    create_sample_movie("The Dark Knight", "Action", 9.0),
    create_sample_movie("Pulp Fiction", "Crime", 8.9),
    create_sample_movie("Interstellar", "Sci-Fi", 8.6),
    create_sample_movie("Superbad", "Comedy", 7.6),
]


# =============================================================================
# IN-MEMORY MOTOR COLLECTION
# =============================================================================

def _matches(doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
    """Evaluate the subset of MongoDB filters the store issues."""
    for key, condition in query.items():
        if key == "$or":
            if not any(_matches(doc, sub) for sub in condition):
                return False
        elif isinstance(condition, dict) and "$regex" in condition:
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            value = doc.get(key)
            if not isinstance(value, str) or not re.search(condition["$regex"], value, flags):
                return False
        elif doc.get(key) != condition:
            return False
    return True


class FakeCursor:
    """Async cursor over a fixed list of documents."""

    def __init__(self, docs: List[Dict[str, Any]]):
        self.docs = docs

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        docs = [dict(d) for d in self.docs]
        return docs if length is None else docs[:length]


class FakeDatabase:
    """Database handle that answers ping unless marked unavailable."""

    def __init__(self):
        self.available = True

    async def command(self, name: str) -> Dict[str, Any]:
        if not self.available:
            raise ServerSelectionTimeoutError("No servers available")
        return {"ok": 1.0}


class FakeMovieCollection:
    """In-memory stand-in for an AsyncIOMotorCollection."""

    def __init__(self):
        self.docs: Dict[ObjectId, Dict[str, Any]] = {}
        self.database = FakeDatabase()

    def reset(self):
        """Reset all data."""
        self.docs.clear()

    def seed(self, movies: List[Dict[str, Any]]) -> List[str]:
        """Insert raw documents directly and return their IDs."""
        ids = []
        for movie in movies:
            oid = ObjectId()
            self.docs[oid] = {"_id": oid, **movie}
            ids.append(str(oid))
        return ids

    def _first(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for doc in self.docs.values():
            if _matches(doc, query):
                return doc
        return None

    def find(self, query: Optional[Dict[str, Any]] = None) -> FakeCursor:
        return FakeCursor([d for d in self.docs.values() if _matches(d, query or {})])

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self._first(query)
        return dict(doc) if doc else None

    async def insert_one(self, doc: Dict[str, Any]) -> SimpleNamespace:
        oid = doc.get("_id") or ObjectId()
        self.docs[oid] = {**doc, "_id": oid}
        return SimpleNamespace(inserted_id=oid, acknowledged=True)

    async def find_one_and_update(
        self,
        query: Dict[str, Any],
        update: Dict[str, Any],
        return_document: ReturnDocument = ReturnDocument.BEFORE,
    ) -> Optional[Dict[str, Any]]:
        doc = self._first(query)
        if doc is None:
            return None
        before = dict(doc)
        doc.update(update.get("$set", {}))
        return dict(doc) if return_document == ReturnDocument.AFTER else before

    async def find_one_and_delete(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        doc = self._first(query)
        if doc is None:
            return None
        return self.docs.pop(doc["_id"])


# =============================================================================
# TOKENS
# =============================================================================

def make_token(
    role: Optional[str] = "admin",
    secret: str = TEST_SECRET,
    expires_in: timedelta = timedelta(minutes=30),
    algorithm: str = "HS256",
) -> str:
    """Mint a signed token the way an external issuer would."""
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": "user-1",
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }
    if role is not None:
        payload["role"] = role
    return jwt.encode(payload, secret, algorithm=algorithm)


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def test_config(tmp_path):
    """Configuration pointing at a throwaway database."""
    return Config(
        mongo_uri="mongodb://localhost:27017/movie_lobby_test",
        db_name="movie_lobby_test",
        jwt_secret=TEST_SECRET,
        port=5000,
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def collection():
    """Provide a fresh in-memory collection for each test."""
    return FakeMovieCollection()


@pytest.fixture
def store(collection):
    """MovieStore over the in-memory collection."""
    return MovieStore(collection)


@pytest.fixture
def seeded_ids(collection):
    """Collection pre-populated with sample movies; yields their IDs."""
    return collection.seed(SAMPLE_MOVIES)


@pytest.fixture
def api_client(test_config, store):
    """Provide FastAPI test client backed by the in-memory store."""
    from api.main import create_app

    app = create_app(config=test_config, store=store)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_headers():
    return bearer(make_token("admin"))


@pytest.fixture
def viewer_headers():
    return bearer(make_token("viewer"))
