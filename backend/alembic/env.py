"""Alembic environment - migrations for the Trouver documents table.

The URL comes from trouver.config.Settings (DATABASE_URL, .env, or the default),
so migrations and the API always target the same database and share the
postgresql:// -> postgresql+asyncpg:// rewrite. Online migrations run on an
async engine with NullPool.
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from alembic import context

from trouver.config import Settings
from trouver.db.base import Base
from trouver.models import document  # noqa: F401  (registers StoredDocument)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
database_url = Settings().database_url


def _configure(**options) -> None:
    context.configure(
        target_metadata=target_metadata, compare_type=True, **options,
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    _configure(connection=connection)


async def _migrate_online() -> None:
    engine = create_async_engine(database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    _configure(
        url=database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_migrate_online())
