"""Place Schemas - Pydantic models with field-level validation for places.

Invariants:
    - PlaceCreate.title / description: 1-150 chars, stripped, non-blank
    - categories holds at most 5 entries
    - image_url is a well-formed http(s) URL, email a well-formed address
    - phone_number <= 20 chars; every address component and geo.type <= 30 chars
    - coordinates are [longitude, latitude]; each axis range-checked on its own
    - Create payloads have no id/user_id/created_at: those are assigned by the core
    - PlaceUpdate mirrors PlaceCreate with every field optional; model_fields_set
      tells "not sent" apart from "sent as null"

Design Decisions:
    - image_url kept as the client's string (validated, not normalised) so the
      stored document round-trips byte for byte
    - coordinates typed as a tuple of two annotated floats: pydantic reports the
      longitude and latitude violations under separate locations
"""

from datetime import datetime
from typing import Annotated

from pydantic import (
    AfterValidator, BaseModel, EmailStr, Field, HttpUrl, TypeAdapter,
    ValidationError as PydanticValidationError, field_validator,
)

TITLE_MAX_LENGTH = 150
DESCRIPTION_MAX_LENGTH = 150
MAX_CATEGORIES = 5
PHONE_MAX_LENGTH = 20
ADDRESS_FIELD_MAX_LENGTH = 30

_HTTP_URL = TypeAdapter(HttpUrl)


def _check_url(value: str) -> str:
    try:
        _HTTP_URL.validate_python(value)
    except PydanticValidationError:
        raise ValueError("must be a valid http(s) URL")
    return value


def _strip_required(value: str | None) -> str | None:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("cannot be empty or whitespace")
    return value


Longitude = Annotated[float, Field(ge=-180, le=180)]
Latitude = Annotated[float, Field(ge=-90, le=90)]
AddressField = Annotated[str, Field(max_length=ADDRESS_FIELD_MAX_LENGTH)]
ImageUrl = Annotated[str, AfterValidator(_check_url)]


class Address(BaseModel):
    street_1: AddressField | None = None
    city: AddressField | None = None
    state: AddressField | None = None
    zip_code: AddressField | None = None


class Geo(BaseModel):
    """GeoJSON-style point."""
    type: AddressField | None = "Point"
    coordinates: tuple[Longitude, Latitude] | None = None


class Location(BaseModel):
    address: Address | None = None
    geo: Geo | None = None


class PlaceCreate(BaseModel):
    """Place creation payload."""
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    categories: list[str] = Field(default_factory=list, max_length=MAX_CATEGORIES)
    image_url: ImageUrl | None = None
    phone_number: str | None = Field(None, max_length=PHONE_MAX_LENGTH)
    email: EmailStr | None = None
    location: Location | None = None

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return _strip_required(v)


class PlaceUpdate(BaseModel):
    """Partial place update - only fields the client sent are applied."""
    title: str | None = Field(None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(
        None, min_length=1, max_length=DESCRIPTION_MAX_LENGTH,
    )
    categories: list[str] | None = Field(None, max_length=MAX_CATEGORIES)
    image_url: ImageUrl | None = None
    phone_number: str | None = Field(None, max_length=PHONE_MAX_LENGTH)
    email: EmailStr | None = None
    location: Location | None = None

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, v: str | None) -> str | None:
        return _strip_required(v)


class Place(PlaceCreate):
    """Stored place document."""
    id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    created_at: datetime
