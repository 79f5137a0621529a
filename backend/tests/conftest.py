"""Root conftest - shared test configuration and store fixtures.

Invariants:
    - Tests never reach a real PostgreSQL: DATABASE_URL points at in-memory SQLite
    - sql_store gives every test a fresh, empty documents table
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from trouver.infrastructure.document_store import SqlDocumentStore  # noqa: E402


@pytest.fixture
async def sql_store():
    """SqlDocumentStore over a single shared in-memory SQLite connection."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    store = SqlDocumentStore(engine)
    await store.create_schema()
    yield store
    await store.dispose()
