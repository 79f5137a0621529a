"""StoredDocument ORM - one row per JSON document in any store/collection.

Invariants:
    - (store, collection, document_id) is unique
    - seq is monotonically increasing and defines insertion order
    - body is the full JSON document, including its own "id" key

Design Decisions:
    - One generic table instead of one table per entity: store and collection are
      caller-supplied names, so new namespaces need no migration
    - JSON column (not JSONB): portable to SQLite for tests
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from trouver.db.base import Base


class StoredDocument(Base):
    """A JSON document addressed by (store, collection, document_id)."""
    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint(
            "store", "collection", "document_id",
            name="uq_documents_namespace_id",
        ),
        Index("ix_documents_namespace_seq", "store", "collection", "seq"),
    )

    seq: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    store: Mapped[str] = mapped_column(String(100), nullable=False)
    collection: Mapped[str] = mapped_column(String(100), nullable=False)
    document_id: Mapped[str] = mapped_column(String(64), nullable=False)
    body: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
