"""Review Service - reviews attached to places, mutated by their author or an admin.

Invariants:
    - A review can only be created for a place that currently exists
    - place_id, user_id, id and created_at never change after creation
    - Deleting a place does not touch its reviews (no cross-document transaction)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from trouver.core.access_policy import ensure_can_mutate
from trouver.core.document_merge import merge_changes
from trouver.core.domain_types import Principal, new_document_id
from trouver.core.pagination import Filter
from trouver.core.repository_protocols import PlaceRepository, ReviewRepository
from trouver.schemas.review import Review, ReviewCreate, ReviewUpdate
from trouver.schemas.validation import validate_stored_review
from trouver.services.deadline import run_with_deadline

logger = logging.getLogger(__name__)

REVIEW_IMMUTABLE_FIELDS = ("id", "place_id", "user_id", "created_at")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReviewService:
    """Review use cases; reads places only to check the parent exists."""

    def __init__(
        self,
        reviews: ReviewRepository,
        places: PlaceRepository,
        store: str,
        collection: str,
        places_collection: str,
        timeout_seconds: float = 5.0,
        id_factory: Callable[[], str] = new_document_id,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._reviews = reviews
        self._places = places
        self._store = store
        self._collection = collection
        self._places_collection = places_collection
        self._timeout = timeout_seconds
        self._new_id = id_factory
        self._now = clock

    async def create(
        self, principal: Principal, place_id: str, payload: ReviewCreate,
    ) -> Review:
        return await run_with_deadline(
            "create review",
            self._create(principal, place_id, payload),
            self._timeout,
        )

    async def get(self, review_id: str) -> Review:
        return await run_with_deadline(
            "read review",
            self._reviews.find_one(self._store, self._collection, review_id),
            self._timeout,
        )

    async def list(self, place_id: str, page_filter: Filter) -> list[Review]:
        return await run_with_deadline(
            "list reviews",
            self._reviews.list(self._store, self._collection, place_id, page_filter),
            self._timeout,
        )

    async def update(
        self, principal: Principal, review_id: str, changes: ReviewUpdate,
    ) -> Review:
        return await run_with_deadline(
            "update review",
            self._update(principal, review_id, changes),
            self._timeout,
        )

    async def delete(self, principal: Principal, review_id: str) -> None:
        await run_with_deadline(
            "delete review",
            self._delete(principal, review_id),
            self._timeout,
        )

    async def _create(
        self, principal: Principal, place_id: str, payload: ReviewCreate,
    ) -> Review:
        await self._places.find_one(self._store, self._places_collection, place_id)
        review = validate_stored_review({
            **payload.model_dump(mode="json"),
            "id": self._new_id(),
            "place_id": place_id,
            "user_id": principal.user_id,
            "created_at": self._now(),
        })
        await self._reviews.insert_one(self._store, self._collection, review)
        logger.info(
            f"Review {review.id} created for place {place_id}",
            extra={"principal_id": principal.user_id, "document_id": review.id},
        )
        return review

    async def _update(
        self, principal: Principal, review_id: str, changes: ReviewUpdate,
    ) -> Review:
        existing = await self._reviews.find_one(self._store, self._collection, review_id)
        ensure_can_mutate(principal, existing.user_id, "Review", review_id)
        merged = merge_changes(
            existing.model_dump(mode="json"),
            changes.model_dump(mode="json", exclude_unset=True),
            immutable=REVIEW_IMMUTABLE_FIELDS,
        )
        updated = validate_stored_review(merged)
        await self._reviews.update_one(self._store, self._collection, updated)
        logger.info(
            f"Review {review_id} updated",
            extra={"principal_id": principal.user_id, "document_id": review_id},
        )
        return updated

    async def _delete(self, principal: Principal, review_id: str) -> None:
        existing = await self._reviews.find_one(self._store, self._collection, review_id)
        ensure_can_mutate(principal, existing.user_id, "Review", review_id)
        await self._reviews.delete_one(self._store, self._collection, review_id)
        logger.info(
            f"Review {review_id} deleted",
            extra={"principal_id": principal.user_id, "document_id": review_id},
        )
