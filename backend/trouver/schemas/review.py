"""Review Schemas - Pydantic models with field-level validation for reviews.

Invariants:
    - content: 1-2000 chars, stripped, non-blank
    - rating: 0.0-5.0 inclusive
    - place_id comes from the URL, never from the body; id/user_id/created_at are
      assigned by the core
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

CONTENT_MAX_LENGTH = 2000
MIN_RATING = 0.0
MAX_RATING = 5.0


def _strip_content(value: str | None) -> str | None:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("cannot be empty or whitespace")
    return value


class ReviewCreate(BaseModel):
    """Review creation payload."""
    content: str = Field(min_length=1, max_length=CONTENT_MAX_LENGTH)
    rating: float = Field(ge=MIN_RATING, le=MAX_RATING)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        return _strip_content(v)


class ReviewUpdate(BaseModel):
    content: str | None = Field(None, min_length=1, max_length=CONTENT_MAX_LENGTH)
    rating: float | None = Field(None, ge=MIN_RATING, le=MAX_RATING)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str | None) -> str | None:
        return _strip_content(v)


class Review(ReviewCreate):
    """Stored review document."""
    id: str = Field(min_length=1)
    place_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    created_at: datetime
