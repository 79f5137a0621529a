"""Review Validation - tests for review payload rules."""

import pytest

from trouver.core.errors import ValidationError
from trouver.schemas.validation import (
    validate_review, validate_review_update, validate_stored_review,
)


def test_valid_review():
    review = validate_review({"content": "  Lovely spot  ", "rating": 4.5})
    assert review.content == "Lovely spot"
    assert review.rating == 4.5


@pytest.mark.parametrize("rating", [0, 5, 2.5])
def test_rating_bounds_inclusive(rating):
    assert validate_review({"content": "ok", "rating": rating}).rating == rating


@pytest.mark.parametrize("data,fields", [
    ({"content": "", "rating": 3}, ["content"]),
    ({"content": "   ", "rating": 3}, ["content"]),
    ({"content": "x" * 2001, "rating": 3}, ["content"]),
    ({"content": "ok", "rating": 5.1}, ["rating"]),
    ({"content": "ok", "rating": -1}, ["rating"]),
    ({"rating": 9}, ["content", "rating"]),
])
def test_invalid_reviews(data, fields):
    with pytest.raises(ValidationError) as exc_info:
        validate_review(data)
    assert sorted(exc_info.value.fields) == fields


def test_update_is_partial():
    update = validate_review_update({"rating": 1})
    assert update.model_dump(exclude_unset=True) == {"rating": 1}


def test_stored_review_requires_place_reference():
    with pytest.raises(ValidationError) as exc_info:
        validate_stored_review({
            "content": "ok", "rating": 3, "id": "r1", "user_id": "u1",
            "created_at": "2026-01-01T00:00:00Z",
        })
    assert exc_info.value.fields == ["place_id"]
