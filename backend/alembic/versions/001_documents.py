"""Documents table - JSON documents addressed by store, collection and id.

Revision ID: 001_documents
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_documents"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "documents",
        sa.Column("seq", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("store", sa.String(100), nullable=False),
        sa.Column("collection", sa.String(100), nullable=False),
        sa.Column("document_id", sa.String(64), nullable=False),
        sa.Column("body", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint(
            "store", "collection", "document_id",
            name="uq_documents_namespace_id",
        ),
    )
    op.create_index(
        "ix_documents_namespace_seq", "documents", ["store", "collection", "seq"],
    )


def downgrade() -> None:
    op.drop_index("ix_documents_namespace_seq", table_name="documents")
    op.drop_table("documents")
