"""Review Routes - reviews nested under places, plus direct access by review id.

Invariants:
    - Creating a review for a missing place returns 404
    - Listing reviews of a place with no reviews returns an empty list
"""

from fastapi import APIRouter, Depends, status

from trouver.api.dependencies import get_page_filter, get_principal, get_review_service
from trouver.core.domain_types import Principal
from trouver.core.pagination import Filter
from trouver.schemas.review import Review, ReviewCreate, ReviewUpdate
from trouver.services.review_service import ReviewService

router = APIRouter(prefix="/api/v1", tags=["reviews"])


def review_out(review: Review) -> dict:
    return review.model_dump(mode="json")


@router.post(
    "/places/{place_id}/reviews", status_code=status.HTTP_201_CREATED,
)
async def create_review(
    place_id: str,
    body: ReviewCreate,
    principal: Principal = Depends(get_principal),
    service: ReviewService = Depends(get_review_service),
):
    review = await service.create(principal, place_id, body)
    return {
        "status": "success",
        "message": "create review operation success",
        "data": {"id": review.id},
    }


@router.get("/places/{place_id}/reviews")
async def list_reviews(
    place_id: str,
    page_filter: Filter = Depends(get_page_filter),
    service: ReviewService = Depends(get_review_service),
):
    reviews = await service.list(place_id, page_filter)
    return {
        "status": "success",
        "data": [review_out(r) for r in reviews],
        "pagination": {"skip": page_filter.skip, "limit": page_filter.limit},
    }


@router.get("/reviews/{review_id}")
async def get_review(
    review_id: str, service: ReviewService = Depends(get_review_service),
):
    review = await service.get(review_id)
    return {
        "status": "success",
        "message": "read review operation success",
        "data": {"review": review_out(review)},
    }


@router.patch("/reviews/{review_id}")
async def update_review(
    review_id: str,
    body: ReviewUpdate,
    principal: Principal = Depends(get_principal),
    service: ReviewService = Depends(get_review_service),
):
    review = await service.update(principal, review_id, body)
    return {
        "status": "success",
        "message": "update review success",
        "data": {"id": review.id, "review": review_out(review)},
    }


@router.delete("/reviews/{review_id}")
async def delete_review(
    review_id: str,
    principal: Principal = Depends(get_principal),
    service: ReviewService = Depends(get_review_service),
):
    await service.delete(principal, review_id)
    return {
        "status": "success",
        "message": "delete review success",
        "data": {"id": review_id},
    }
