"""
Database configuration and session management.

Provides the SQLAlchemy async engine and session factory that back the
key-value store. The schema is a single ``kv_entries`` table, so tables
are created directly at startup instead of through migrations.
"""

from pathlib import Path

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

from navsite.core.config import settings
from navsite.models.base import Base


def get_async_engine(database_url: str | None = None) -> AsyncEngine:
    """
    Create and configure the async SQLAlchemy engine.

    For SQLite:
    - Uses StaticPool (single file or in-memory database)
    - Enables check_same_thread=False for async compatibility
    - Sets WAL mode for file databases

    Args:
        database_url: Override for settings.database_url

    Returns:
        Configured AsyncEngine instance
    """
    url = database_url or settings.database_url
    is_sqlite = url.startswith("sqlite")

    connect_args: dict = {"check_same_thread": False} if is_sqlite else {}

    engine_kwargs = {
        "echo": False,
        "connect_args": connect_args,
    }

    if is_sqlite:
        engine_kwargs["poolclass"] = StaticPool

    engine = create_async_engine(url, **engine_kwargs)

    if is_sqlite and ":memory:" not in url:
        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    return engine


# Global async engine instance
engine = get_async_engine()


# Async session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(database_url)
    if not url.drivername.startswith("sqlite") or not url.database:
        return
    if url.database == ":memory:":
        return
    Path(url.database).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


async def init_db() -> None:
    """
    Initialize the database.

    Creates the SQLite data directory (if needed) and the kv_entries table.
    Safe to call repeatedly.
    """
    # Import models so metadata is populated before create_all()
    from navsite import models  # noqa: F401

    _ensure_sqlite_directory(settings.database_url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """
    Close the database connection.

    Should be called at application shutdown to dispose of pooled connections.
    """
    await engine.dispose()


async def ping() -> None:
    """Run ``SELECT 1``; raises if the database is unreachable."""
    async with async_session_maker() as session:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
