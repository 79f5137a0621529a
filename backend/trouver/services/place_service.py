"""Place Service - create/read/list/search/update/delete places for a principal.

Invariants:
    - Ids and created_at are assigned here, never taken from the payload
    - The owner of a new place is the calling principal
    - update/delete: find -> authorize against the STORED owner -> write; the first
      failure short-circuits and nothing is written
    - Update is fetch-merge-write: only fields the client sent are applied, and
      id/user_id/created_at keep their stored values
    - The merged document is re-validated before it is persisted
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from trouver.core.access_policy import ensure_can_mutate
from trouver.core.document_merge import merge_changes
from trouver.core.domain_types import Principal, new_document_id
from trouver.core.pagination import Filter
from trouver.core.repository_protocols import PlaceRepository
from trouver.schemas.place import Place, PlaceCreate, PlaceUpdate
from trouver.schemas.validation import validate_stored_place
from trouver.services.deadline import run_with_deadline

logger = logging.getLogger(__name__)

PLACE_IMMUTABLE_FIELDS = ("id", "user_id", "created_at")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PlaceService:
    """Place use cases bound to one store/collection namespace."""

    def __init__(
        self,
        places: PlaceRepository,
        store: str,
        collection: str,
        timeout_seconds: float = 5.0,
        id_factory: Callable[[], str] = new_document_id,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._places = places
        self._store = store
        self._collection = collection
        self._timeout = timeout_seconds
        self._new_id = id_factory
        self._now = clock

    async def create(self, principal: Principal, payload: PlaceCreate) -> Place:
        place = validate_stored_place({
            **payload.model_dump(mode="json"),
            "id": self._new_id(),
            "user_id": principal.user_id,
            "created_at": self._now(),
        })
        await run_with_deadline(
            "create place",
            self._places.insert_one(self._store, self._collection, place),
            self._timeout,
        )
        logger.info(
            f"Place {place.id} created",
            extra={"principal_id": principal.user_id, "document_id": place.id},
        )
        return place

    async def get(self, place_id: str) -> Place:
        return await run_with_deadline(
            "read place",
            self._places.find_one(self._store, self._collection, place_id),
            self._timeout,
        )

    async def list(self, page_filter: Filter) -> list[Place]:
        return await run_with_deadline(
            "list places",
            self._places.list(self._store, self._collection, page_filter),
            self._timeout,
        )

    async def search(self, term: str, page_filter: Filter) -> list[Place]:
        return await run_with_deadline(
            "search places",
            self._places.search_place(
                self._store, self._collection, term, page_filter,
            ),
            self._timeout,
        )

    async def update(
        self, principal: Principal, place_id: str, changes: PlaceUpdate,
    ) -> Place:
        return await run_with_deadline(
            "update place",
            self._update(principal, place_id, changes),
            self._timeout,
        )

    async def delete(self, principal: Principal, place_id: str) -> None:
        await run_with_deadline(
            "delete place",
            self._delete(principal, place_id),
            self._timeout,
        )

    async def _update(
        self, principal: Principal, place_id: str, changes: PlaceUpdate,
    ) -> Place:
        existing = await self._places.find_one(self._store, self._collection, place_id)
        ensure_can_mutate(principal, existing.user_id, "Place", place_id)
        merged = merge_changes(
            existing.model_dump(mode="json"),
            changes.model_dump(mode="json", exclude_unset=True),
            immutable=PLACE_IMMUTABLE_FIELDS,
        )
        updated = validate_stored_place(merged)
        await self._places.update_one(self._store, self._collection, updated)
        logger.info(
            f"Place {place_id} updated",
            extra={"principal_id": principal.user_id, "document_id": place_id},
        )
        return updated

    async def _delete(self, principal: Principal, place_id: str) -> None:
        existing = await self._places.find_one(self._store, self._collection, place_id)
        ensure_can_mutate(principal, existing.user_id, "Place", place_id)
        await self._places.delete_one(self._store, self._collection, place_id)
        logger.info(
            f"Place {place_id} deleted",
            extra={"principal_id": principal.user_id, "document_id": place_id},
        )
