"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode — create_async_engine over aiosqlite,
AsyncSession for per-request database access, dependency injection via FastAPI.
"""

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from dietracker.config import settings


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an engine; SQLite connections get foreign keys switched on."""
    new_engine = create_async_engine(database_url, echo=echo)

    if make_url(database_url).get_backend_name() == "sqlite":

        @event.listens_for(new_engine.sync_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.close()

    return new_engine


engine = build_engine(settings.database_url, echo=settings.debug)

# Session factory: one session per request.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    """FastAPI dependency — yields a session per request, auto-closes."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
