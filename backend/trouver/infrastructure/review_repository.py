"""Review Repository - ReviewRepository implementation over a DocumentStoreClient.

Invariants:
    - list() is restricted to one place_id and returns reviews in insertion order
    - The place reference is not checked here; services decide whether it must exist
"""

from __future__ import annotations

from trouver.core.pagination import Filter
from trouver.infrastructure.document_repository import DocumentRepository
from trouver.schemas.review import Review


class DocumentReviewRepository(DocumentRepository[Review]):
    model = Review
    resource_type = "Review"

    async def list(
        self, store: str, collection: str, place_id: str, page_filter: Filter,
    ) -> list[Review]:
        if page_filter.limit == 0:
            return []
        bodies = await self._client.find(
            store, collection, {"place_id": place_id},
            page_filter.skip, page_filter.limit,
        )
        return self._decode_many(bodies, collection)
