"""Place Routes - HTTP surface for place CRUD and full-text search.

Invariants:
    - Bodies are validated by Pydantic before reaching the handler
    - Mutating routes require a principal; reads are public
    - /search is registered before /{place_id} so it is not captured as an id
"""

from fastapi import APIRouter, Depends, Query, status

from trouver.api.dependencies import get_page_filter, get_place_service, get_principal
from trouver.core.domain_types import Principal
from trouver.core.pagination import Filter
from trouver.schemas.place import Place, PlaceCreate, PlaceUpdate
from trouver.services.place_service import PlaceService

router = APIRouter(prefix="/api/v1/places", tags=["places"])

SEARCH_TERM_MAX_LENGTH = 200


def place_out(place: Place) -> dict:
    return place.model_dump(mode="json", exclude_none=True)


def _page(page_filter: Filter) -> dict:
    return {"skip": page_filter.skip, "limit": page_filter.limit}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_place(
    body: PlaceCreate,
    principal: Principal = Depends(get_principal),
    service: PlaceService = Depends(get_place_service),
):
    """Create a place owned by the caller."""
    place = await service.create(principal, body)
    return {
        "status": "success",
        "message": "create place operation success",
        "data": {"id": place.id},
    }


@router.get("")
async def list_places(
    page_filter: Filter = Depends(get_page_filter),
    service: PlaceService = Depends(get_place_service),
):
    places = await service.list(page_filter)
    return {
        "status": "success",
        "data": [place_out(p) for p in places],
        "pagination": _page(page_filter),
    }


@router.get("/search")
async def search_places(
    q: str = Query(min_length=1, max_length=SEARCH_TERM_MAX_LENGTH),
    page_filter: Filter = Depends(get_page_filter),
    service: PlaceService = Depends(get_place_service),
):
    """Relevance-ranked search over title and description."""
    places = await service.search(q, page_filter)
    return {
        "status": "success",
        "data": [place_out(p) for p in places],
        "pagination": _page(page_filter),
    }


@router.get("/{place_id}")
async def get_place(
    place_id: str, service: PlaceService = Depends(get_place_service),
):
    place = await service.get(place_id)
    return {
        "status": "success",
        "message": "read place operation success",
        "data": {"place": place_out(place)},
    }


@router.patch("/{place_id}")
async def update_place(
    place_id: str,
    body: PlaceUpdate,
    principal: Principal = Depends(get_principal),
    service: PlaceService = Depends(get_place_service),
):
    """Apply the fields present in the body; the owner never changes."""
    place = await service.update(principal, place_id, body)
    return {
        "status": "success",
        "message": "update place success",
        "data": {"id": place.id, "place": place_out(place)},
    }


@router.delete("/{place_id}")
async def delete_place(
    place_id: str,
    principal: Principal = Depends(get_principal),
    service: PlaceService = Depends(get_place_service),
):
    await service.delete(principal, place_id)
    return {
        "status": "success",
        "message": "delete place success",
        "data": {"id": place_id},
    }
