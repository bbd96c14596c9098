"""Database connection helpers."""

from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base shared by every table of the scanner."""


def is_sqlite_url(database_url: str) -> bool:
    """Return True when the URL points to a SQLite database."""
    return make_url(database_url).get_backend_name() == "sqlite"


def _enable_sqlite_pragmas(dbapi_connection: Any, _connection_record: Any) -> None:
    # SQLite ignores foreign keys unless enabled on every connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def create_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the given URL.

    SQLite engines get foreign key enforcement and WAL journaling on every
    new connection; other backends are created as-is.

    Args:
        database_url: SQLAlchemy async URL (sqlite+aiosqlite, postgresql+psycopg)
        echo: Log emitted SQL statements

    Returns:
        AsyncEngine: Engine owning its own connection pool

    Example:
        ```python
        from src.helpers.db import Base, create_engine

        engine = create_engine("sqlite+aiosqlite:///./blockchain_data.db")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        ```
    """
    engine = create_async_engine(database_url, echo=echo)

    if is_sqlite_url(database_url):
        event.listen(engine.sync_engine, "connect", _enable_sqlite_pragmas)

    return engine


async def create_tables(engine: AsyncEngine) -> None:
    """Create every registered table that does not exist yet."""
    # Register table classes on Base.metadata
    import src.data.blocks.db  # noqa: F401
    import src.data.logs.db  # noqa: F401
    import src.data.transactions.db  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


__all__ = [
    "Base",
    "create_engine",
    "create_tables",
    "is_sqlite_url",
]
