"""Document Repository - shared entity <-> document mapping over a store client.

Invariants:
    - Store and collection are arguments of every call, never instance state
    - insert_one fails with PersistenceError when the store reports a different id
    - find_one raises NotFoundError for a missing document AND for a body that no
      longer decodes into the entity model
    - update_one sends only the fields explicitly set on the entity (exclude_unset),
      so an entity built from a partial payload never clears stored values
    - update_one/delete_one raise NotFoundError when zero documents matched
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from trouver.core.errors import NotFoundError, PersistenceError
from trouver.core.repository_protocols import DocumentStoreClient

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)


class DocumentRepository(Generic[EntityT]):
    """Base repository for one entity type stored as JSON documents."""

    model: type[EntityT]
    resource_type: str

    def __init__(self, client: DocumentStoreClient):
        self._client = client

    # ─── Mapping ──────────────────────────────────────────────────

    @staticmethod
    def _encode(entity: EntityT, **dump_options) -> dict:
        return entity.model_dump(mode="json", **dump_options)

    def _decode_many(self, bodies: Iterable[dict], collection: str) -> list[EntityT]:
        try:
            return [self.model.model_validate(body) for body in bodies]
        except PydanticValidationError as e:
            logger.error(
                f"Undecodable {self.resource_type} document in list: {e}",
                extra={"collection": collection, "operation": "list"},
            )
            raise PersistenceError(
                f"Stored {self.resource_type} failed to decode", "list",
            ) from e

    # ─── Operations ───────────────────────────────────────────────

    async def insert_one(self, store: str, collection: str, entity: EntityT) -> None:
        entity_id = getattr(entity, "id")
        inserted_id = await self._client.insert_one(
            store, collection, self._encode(entity),
        )
        if inserted_id != entity_id:
            logger.error(
                f"Store reported id {inserted_id!r} for inserted {self.resource_type}",
                extra={"document_id": entity_id, "collection": collection},
            )
            raise PersistenceError(
                f"Inserted id {inserted_id!r} does not match {entity_id!r}", "insert",
            )

    async def find_one(self, store: str, collection: str, entity_id: str) -> EntityT:
        body = await self._client.find_one(store, collection, entity_id)
        if body is None:
            raise NotFoundError(self.resource_type, entity_id)
        try:
            return self.model.model_validate(body)
        except PydanticValidationError as e:
            logger.error(
                f"Undecodable {self.resource_type} document: {e}",
                extra={"document_id": entity_id, "collection": collection},
            )
            raise NotFoundError(self.resource_type, entity_id) from e

    async def update_one(self, store: str, collection: str, entity: EntityT) -> None:
        entity_id = getattr(entity, "id")
        fields = self._encode(entity, exclude_unset=True, exclude={"id"})
        matched = await self._client.update_one(store, collection, entity_id, fields)
        if matched == 0:
            raise NotFoundError(self.resource_type, entity_id)

    async def delete_one(self, store: str, collection: str, entity_id: str) -> None:
        deleted = await self._client.delete_one(store, collection, entity_id)
        if deleted == 0:
            raise NotFoundError(self.resource_type, entity_id)
