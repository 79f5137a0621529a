"""SQL Document Store - async pooled document store on top of SQLAlchemy.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions are mapped to PersistenceError (core/errors.py)
    - Each write touches exactly one row inside one transaction (per-document atomicity)
    - find() and ties in text_search() follow insertion order (seq ascending)
    - limit == 0, a blank search term, or a skip beyond MAX_OFFSET returns []
      without querying; limit is capped at MAX_OFFSET, so no cursor value ever
      overflows a signed 64-bit SQL integer

Design Decisions:
    - Shared engine per process, handed to repositories by injection; never owned
      by a request
    - PostgreSQL ranks with to_tsvector/plainto_tsquery/ts_rank; other dialects
      (SQLite in tests) rank by the number of matched terms using LIKE
    - SQLite's lower() folds ASCII only, so SQLite connections get a
      trouver_fold() function backed by str.lower(); term and column fold the same way
"""

import logging
import operator
from collections.abc import Mapping, Sequence
from contextlib import asynccontextmanager
from functools import reduce
from typing import Any, AsyncGenerator

from sqlalchemy import case, cast, delete, event, func, select, text
from sqlalchemy.dialects.postgresql import REGCONFIG
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from trouver.core.errors import PersistenceError
from trouver.db.base import Base
from trouver.models.document import StoredDocument

logger = logging.getLogger(__name__)

MAX_OFFSET = 2**63 - 1
SQLITE_FOLD_FUNCTION = "trouver_fold"


def _fold(value: str | None) -> str | None:
    return value.lower() if value is not None else None


def _register_sqlite_fold(dbapi_connection, connection_record) -> None:
    dbapi_connection.create_function(
        SQLITE_FOLD_FUNCTION, 1, _fold, deterministic=True,
    )


def _like_pattern(term: str) -> str:
    escaped = (
        term.lower()
        .replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
    return f"%{escaped}%"


class SqlDocumentStore:
    """Document store client backed by a single `documents` table."""

    def __init__(self, engine: AsyncEngine, search_language: str = "english"):
        self.engine = engine
        self.search_language = search_language
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _register_sqlite_fold)

    @classmethod
    def from_url(
        cls,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        search_language: str = "english",
    ) -> "SqlDocumentStore":
        options: dict[str, Any] = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            options.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        return cls(create_async_engine(database_url, **options), search_language)

    @asynccontextmanager
    async def session(
        self, operation: str = "query",
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"Store integrity error during {operation}: {e}")
            raise PersistenceError("Integrity constraint violated", operation) from e
        except OperationalError as e:
            await session.rollback()
            logger.error(f"Store operational error during {operation}: {e}")
            raise PersistenceError("Connection or operational error", operation) from e
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"Store driver error during {operation}: {e}")
            raise PersistenceError("Database driver error", operation) from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error during {operation}: {e}")
            raise PersistenceError("Database operation failed", operation) from e
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create tables directly (tests and local development; production uses Alembic)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def health_check(self) -> bool:
        """Check store connectivity (for readiness probes)."""
        try:
            async with self.session("health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Store health check failed: {e}")
            return False

    # ─── Document operations ──────────────────────────────────────

    @staticmethod
    def _scope(store: str, collection: str) -> tuple:
        return (
            StoredDocument.store == store,
            StoredDocument.collection == collection,
        )

    def _key(self, store: str, collection: str, document_id: str) -> tuple:
        return (
            *self._scope(store, collection),
            StoredDocument.document_id == document_id,
        )

    async def insert_one(
        self, store: str, collection: str, document: Mapping[str, Any],
    ) -> str:
        document_id = document.get("id")
        if not document_id:
            raise PersistenceError("Document has no id", "insert")
        row = StoredDocument(
            store=store,
            collection=collection,
            document_id=str(document_id),
            body=dict(document),
        )
        async with self.session("insert") as db:
            db.add(row)
            await db.commit()
        return row.document_id

    async def find_one(
        self, store: str, collection: str, document_id: str,
    ) -> dict | None:
        async with self.session("find") as db:
            result = await db.execute(
                select(StoredDocument.body).where(
                    *self._key(store, collection, document_id),
                ),
            )
            return result.scalar_one_or_none()

    async def find(
        self,
        store: str,
        collection: str,
        where: Mapping[str, str],
        skip: int,
        limit: int,
    ) -> list[dict]:
        if limit == 0 or skip > MAX_OFFSET:
            return []
        query = select(StoredDocument.body).where(*self._scope(store, collection))
        for field, value in where.items():
            query = query.where(StoredDocument.body[field].as_string() == value)
        query = (
            query.order_by(StoredDocument.seq)
            .offset(skip)
            .limit(min(limit, MAX_OFFSET))
        )
        async with self.session("find") as db:
            result = await db.execute(query)
            return list(result.scalars().all())

    async def update_one(
        self,
        store: str,
        collection: str,
        document_id: str,
        fields: Mapping[str, Any],
    ) -> int:
        """$set-style merge of `fields` into one document. Returns matched count."""
        async with self.session("update") as db:
            result = await db.execute(
                select(StoredDocument)
                .where(*self._key(store, collection, document_id))
                .with_for_update(),
            )
            row = result.scalar_one_or_none()
            if row is None:
                return 0
            # reassign: in-place mutation of a JSON column is not change-tracked
            row.body = {**row.body, **fields}
            await db.commit()
        return 1

    async def delete_one(
        self, store: str, collection: str, document_id: str,
    ) -> int:
        async with self.session("delete") as db:
            result = await db.execute(
                delete(StoredDocument).where(
                    *self._key(store, collection, document_id),
                ),
            )
            await db.commit()
            return result.rowcount

    async def text_search(
        self,
        store: str,
        collection: str,
        term: str,
        fields: Sequence[str],
        skip: int,
        limit: int,
    ) -> list[dict]:
        """Relevance-ranked search over `fields`, best match first."""
        terms = term.split()
        if not terms or not fields or limit == 0 or skip > MAX_OFFSET:
            return []
        dialect = self.engine.dialect.name
        if dialect == "postgresql":
            score, matches = self._ts_rank(term, fields)
        else:
            fold = getattr(func, SQLITE_FOLD_FUNCTION) if dialect == "sqlite" else func.lower
            score, matches = self._term_hits(terms, fields, fold)
        query = (
            select(StoredDocument.body)
            .where(*self._scope(store, collection), matches)
            .order_by(score.desc(), StoredDocument.seq)
            .offset(skip)
            .limit(min(limit, MAX_OFFSET))
        )
        async with self.session("search") as db:
            result = await db.execute(query)
            return list(result.scalars().all())

    def _ts_rank(self, term: str, fields: Sequence[str]):
        language = cast(self.search_language, REGCONFIG)
        document = func.to_tsvector(
            language,
            func.concat_ws(" ", *(StoredDocument.body[f].as_string() for f in fields)),
        )
        query = func.plainto_tsquery(language, term)
        return func.ts_rank(document, query), document.op("@@")(query)

    @staticmethod
    def _term_hits(terms: Sequence[str], fields: Sequence[str], fold):
        columns = [fold(StoredDocument.body[f].as_string()) for f in fields]
        hits = [
            case((column.like(_like_pattern(t), escape="\\"), 1), else_=0)
            for t in terms
            for column in columns
        ]
        score = reduce(operator.add, hits)
        return score, score > 0
