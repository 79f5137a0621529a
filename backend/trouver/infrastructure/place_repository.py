"""Place Repository - PlaceRepository implementation over a DocumentStoreClient.

Invariants:
    - list() returns places in insertion order
    - search_place() ranks by relevance over title and description, best first
    - limit == 0, skip past the end, or no matches all yield [] (never an error)
"""

from __future__ import annotations

from trouver.core.pagination import Filter
from trouver.infrastructure.document_repository import DocumentRepository
from trouver.schemas.place import Place

SEARCH_FIELDS = ("title", "description")


class DocumentPlaceRepository(DocumentRepository[Place]):
    model = Place
    resource_type = "Place"

    async def list(
        self, store: str, collection: str, page_filter: Filter,
    ) -> list[Place]:
        if page_filter.limit == 0:
            return []
        bodies = await self._client.find(
            store, collection, {}, page_filter.skip, page_filter.limit,
        )
        return self._decode_many(bodies, collection)

    async def search_place(
        self, store: str, collection: str, term: str, page_filter: Filter,
    ) -> list[Place]:
        if page_filter.limit == 0 or not term.strip():
            return []
        bodies = await self._client.text_search(
            store, collection, term, SEARCH_FIELDS,
            page_filter.skip, page_filter.limit,
        )
        return self._decode_many(bodies, collection)
