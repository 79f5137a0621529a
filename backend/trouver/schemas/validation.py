"""Payload Validation - turns pydantic failures into one aggregated ValidationError.

Invariants:
    - Every violated rule is reported, never just the first
    - Violation shape is {"field": dotted.path, "message": str, "type": str}
    - The "body" prefix FastAPI adds to request locations is dropped, so HTTP and
      direct callers see identical field paths
"""

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from trouver.core.errors import ValidationError
from trouver.schemas.place import Place, PlaceCreate, PlaceUpdate
from trouver.schemas.review import Review, ReviewCreate, ReviewUpdate

ModelT = TypeVar("ModelT", bound=BaseModel)


def violations_from(errors: Iterable[Mapping[str, Any]]) -> list[dict]:
    """Flatten pydantic error dicts into field-level violations."""
    violations = []
    for e in errors:
        loc = list(e.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        violations.append({
            "field": ".".join(str(part) for part in loc) or "__root__",
            "message": e["msg"],
            "type": e["type"],
        })
    return violations


def validate_payload(model: type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """Validate `data` against `model`, raising ValidationError with all violations."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(violations_from(e.errors())) from e


def validate_place(data: Mapping[str, Any]) -> PlaceCreate:
    return validate_payload(PlaceCreate, data)


def validate_place_update(data: Mapping[str, Any]) -> PlaceUpdate:
    return validate_payload(PlaceUpdate, data)


def validate_stored_place(data: Mapping[str, Any]) -> Place:
    return validate_payload(Place, data)


def validate_review(data: Mapping[str, Any]) -> ReviewCreate:
    return validate_payload(ReviewCreate, data)


def validate_review_update(data: Mapping[str, Any]) -> ReviewUpdate:
    return validate_payload(ReviewUpdate, data)


def validate_stored_review(data: Mapping[str, Any]) -> Review:
    return validate_payload(Review, data)
