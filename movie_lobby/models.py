"""
Data models for Movie Lobby.

Pydantic models describing the ``movies`` collection. They are the single
source of validation for writes: the store validates every create and
update against them before anything reaches the database.
"""

from typing import Annotated, Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr, field_validator

MOVIE_FIELDS = ("title", "genre", "rating", "streamingLink")

# JSON numbers only: booleans and numeric strings are rejected, ints stay ints
Rating = Union[
    Annotated[StrictInt, Field(ge=0, le=10)],
    Annotated[StrictFloat, Field(ge=0, le=10)],
]


class MovieBase(BaseModel):
    """Fields shared by every movie payload."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("title", "genre", "streaming_link", check_fields=False)
    @classmethod
    def not_blank(cls, value: Optional[str]) -> Optional[str]:
        """Reject whitespace-only text; the value itself is stored as sent."""
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value


class MovieCreate(MovieBase):
    """Payload for adding a movie to the lobby. All fields are required."""

    title: StrictStr = Field(..., min_length=1, description="Movie title")
    genre: StrictStr = Field(..., min_length=1, description="Genre (e.g. Action, Drama)")
    rating: Rating = Field(..., description="Rating on a 0 to 10 scale")
    streaming_link: StrictStr = Field(
        ..., min_length=1, alias="streamingLink", description="Link to stream the movie"
    )

    def to_document(self) -> Dict[str, Any]:
        """Convert to a document for insertion."""
        return self.model_dump(by_alias=True)


class MovieUpdate(MovieBase):
    """
    Partial update payload.

    Every field is optional, but a field that is sent must be valid:
    an explicit null is rejected just like an out-of-range rating.
    """

    title: StrictStr = Field(None, min_length=1)
    genre: StrictStr = Field(None, min_length=1)
    rating: Rating = Field(None)
    streaming_link: StrictStr = Field(None, min_length=1, alias="streamingLink")

    def to_update(self) -> Dict[str, Any]:
        """Only the fields the caller actually sent, keyed as stored."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class Movie(MovieCreate):
    """A persisted movie, with its store-assigned ID."""

    id: str = Field(..., description="Store-assigned identifier")

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Movie":
        """Create a Movie from a raw MongoDB document.

        Raises pydantic.ValidationError if the stored document does not
        match the collection schema.
        """
        data = {key: doc.get(key) for key in MOVIE_FIELDS}
        data["id"] = str(doc["_id"])
        return cls.model_validate(data)
