"""In-Memory Document Store - DocumentStoreClient fake for service tests.

Invariants:
    - Satisfies DocumentStoreClient structurally (no inheritance)
    - Documents are deep-copied in and out, like a real store boundary
    - Iteration follows insertion order; text_search ranks by term occurrences
    - Every call is recorded in `calls` so tests can assert the store was NOT touched
    - delay_seconds makes every call slow, for deadline tests
"""

import asyncio
import copy

from trouver.core.errors import PersistenceError

WRITE_OPERATIONS = ("insert_one", "update_one", "delete_one")


class InMemoryDocumentStore:
    def __init__(self, delay_seconds: float = 0.0):
        self._collections: dict[tuple[str, str], dict[str, dict]] = {}
        self.delay_seconds = delay_seconds
        self.calls: list[tuple[str, str, str]] = []
        self.healthy = True

    @property
    def writes(self) -> list[tuple[str, str, str]]:
        return [c for c in self.calls if c[0] in WRITE_OPERATIONS]

    def documents(self, store: str, collection: str) -> dict[str, dict]:
        return self._collections.setdefault((store, collection), {})

    async def _record(self, operation: str, store: str, collection: str) -> None:
        self.calls.append((operation, store, collection))
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

    async def insert_one(self, store, collection, document):
        await self._record("insert_one", store, collection)
        docs = self.documents(store, collection)
        if document["id"] in docs:
            raise PersistenceError("duplicate id", "insert")
        docs[document["id"]] = copy.deepcopy(dict(document))
        return document["id"]

    async def find_one(self, store, collection, document_id):
        await self._record("find_one", store, collection)
        doc = self.documents(store, collection).get(document_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def find(self, store, collection, where, skip, limit):
        await self._record("find", store, collection)
        matches = [
            doc for doc in self.documents(store, collection).values()
            if all(doc.get(k) == v for k, v in where.items())
        ]
        return copy.deepcopy(matches[skip:skip + limit])

    async def update_one(self, store, collection, document_id, fields):
        await self._record("update_one", store, collection)
        docs = self.documents(store, collection)
        if document_id not in docs:
            return 0
        docs[document_id] = {**docs[document_id], **copy.deepcopy(dict(fields))}
        return 1

    async def delete_one(self, store, collection, document_id):
        await self._record("delete_one", store, collection)
        removed = self.documents(store, collection).pop(document_id, None)
        return 0 if removed is None else 1

    async def text_search(self, store, collection, term, fields, skip, limit):
        await self._record("text_search", store, collection)
        terms = term.lower().split()
        scored = []
        for doc in self.documents(store, collection).values():
            text = " ".join(str(doc.get(f) or "") for f in fields).lower()
            score = sum(text.count(t) for t in terms)
            if score:
                scored.append((score, doc))
        scored.sort(key=lambda pair: -pair[0])
        return copy.deepcopy([doc for _, doc in scored][skip:skip + limit])

    async def health_check(self):
        return self.healthy
