"""Alembic environment for the tracker database.

Learn: `dietracker migrate` builds the Alembic Config in code, so there is
no alembic.ini. The URL comes from settings unless the caller set one.
SQLite cannot alter most constraints in place, so every run uses batch
mode, which rebuilds the table instead.
"""

import asyncio

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

from dietracker.config import settings
from dietracker.db.models import Base

config = context.config

if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", settings.database_url)


def _migrate(**options) -> None:
    context.configure(target_metadata=Base.metadata, render_as_batch=True, **options)
    with context.begin_transaction():
        context.run_migrations()


async def _migrate_online() -> None:
    engine = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with engine.connect() as connection:
        await connection.run_sync(lambda conn: _migrate(connection=conn))
    await engine.dispose()


if context.is_offline_mode():
    # Offline mode emits the DDL as SQL text instead of executing it.
    _migrate(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
else:
    asyncio.run(_migrate_online())
