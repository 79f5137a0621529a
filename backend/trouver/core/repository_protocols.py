"""Boundary Protocols - contracts between core and shell.

Invariants:
    - Core NEVER imports from infrastructure/services/api; implementations are injected
    - Every repository operation names its store and collection explicitly, so one
      implementation serves several logical namespaces (e.g. staging vs production)
    - Missing documents raise NotFoundError; store failures raise PersistenceError

Design Decisions:
    - Protocol over ABC: structural subtyping, an in-memory fake satisfies the
      client contract without inheriting anything
    - Async in Protocol: implementations do IO; the pure policy/validation code that
      runs around these calls stays synchronous
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from trouver.core.pagination import Filter
from trouver.schemas.place import Place
from trouver.schemas.review import Review


class DocumentStoreClient(Protocol):
    """Contract for the document store (connection pool) - implemented by shell.

    Documents are JSON-compatible dicts carrying their own "id" key.
    """
    async def insert_one(
        self, store: str, collection: str, document: Mapping[str, Any],
    ) -> str: ...
    async def find_one(
        self, store: str, collection: str, document_id: str,
    ) -> dict | None: ...
    async def find(
        self, store: str, collection: str, where: Mapping[str, str],
        skip: int, limit: int,
    ) -> list[dict]: ...
    async def update_one(
        self, store: str, collection: str, document_id: str,
        fields: Mapping[str, Any],
    ) -> int: ...
    async def delete_one(
        self, store: str, collection: str, document_id: str,
    ) -> int: ...
    async def text_search(
        self, store: str, collection: str, term: str, fields: Sequence[str],
        skip: int, limit: int,
    ) -> list[dict]: ...
    async def health_check(self) -> bool: ...


class PlaceRepository(Protocol):
    """Contract for place persistence - implemented by shell."""
    async def insert_one(self, store: str, collection: str, place: Place) -> None: ...
    async def find_one(self, store: str, collection: str, place_id: str) -> Place: ...
    async def list(
        self, store: str, collection: str, page_filter: Filter,
    ) -> list[Place]: ...
    async def update_one(self, store: str, collection: str, place: Place) -> None: ...
    async def delete_one(self, store: str, collection: str, place_id: str) -> None: ...
    async def search_place(
        self, store: str, collection: str, term: str, page_filter: Filter,
    ) -> list[Place]: ...


class ReviewRepository(Protocol):
    """Contract for review persistence - implemented by shell."""
    async def insert_one(self, store: str, collection: str, review: Review) -> None: ...
    async def find_one(self, store: str, collection: str, review_id: str) -> Review: ...
    async def list(
        self, store: str, collection: str, place_id: str, page_filter: Filter,
    ) -> list[Review]: ...
    async def update_one(self, store: str, collection: str, review: Review) -> None: ...
    async def delete_one(self, store: str, collection: str, review_id: str) -> None: ...
