"""Request Dependencies - principal extraction, pagination and service lookup.

Invariants:
    - The principal comes from headers set by the upstream identity gateway; tokens
      are verified there, never here
    - A missing or blank X-User-Id raises UnauthenticatedError (401)
    - The role claim is parsed into Role; unknown values become Role.USER
    - Services are read from app.state.container, built once in create_app()
"""

from fastapi import Depends, Header, Query, Request

from trouver.core.domain_types import Principal, Role, UserId
from trouver.core.errors import UnauthenticatedError
from trouver.core.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Filter
from trouver.services.container import ServiceContainer
from trouver.services.place_service import PlaceService
from trouver.services.review_service import ReviewService


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_place_service(
    container: ServiceContainer = Depends(get_container),
) -> PlaceService:
    return container.places


def get_review_service(
    container: ServiceContainer = Depends(get_container),
) -> ReviewService:
    return container.reviews


def get_principal(
    x_user_id: str | None = Header(None),
    x_user_role: str | None = Header(None),
) -> Principal:
    """Typed principal for mutating routes."""
    if not x_user_id or not x_user_id.strip():
        raise UnauthenticatedError()
    return Principal(user_id=UserId(x_user_id.strip()), role=Role.parse(x_user_role))


def get_page_filter(
    page: int = Query(DEFAULT_PAGE, ge=1),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> Filter:
    return Filter.from_page(page, size)
