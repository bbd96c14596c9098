"""Tests for database connection helpers."""

from pathlib import Path

import pytest

from sqlalchemy import inspect, text

from src.helpers.db import Base, create_engine, create_tables, is_sqlite_url


class TestIsSqliteUrl:
    """Tests for is_sqlite_url function."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("sqlite+aiosqlite:///./blockchain_data.db", True),
            ("sqlite+aiosqlite:///:memory:", True),
            ("postgresql+psycopg://user:pw@localhost:5432/chain", False),
        ],
    )
    def test_detects_backend(self, url: str, expected: bool) -> None:
        """Test backend detection from the URL scheme."""
        assert is_sqlite_url(url) is expected


class TestCreateEngine:
    """Tests for create_engine function."""

    @pytest.mark.asyncio
    async def test_sqlite_pragmas(self, tmp_path: Path) -> None:
        """Test SQLite connections enforce foreign keys and use WAL."""
        engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'pragma.db'}")
        try:
            async with engine.connect() as conn:
                foreign_keys = (await conn.execute(text("PRAGMA foreign_keys"))).scalar()
                journal_mode = (await conn.execute(text("PRAGMA journal_mode"))).scalar()
        finally:
            await engine.dispose()

        assert foreign_keys == 1
        assert journal_mode == "wal"

    def test_postgresql_engine_is_lazy(self) -> None:
        """Test creating a PostgreSQL engine does not connect."""
        engine = create_engine("postgresql+psycopg://user:pw@localhost:5432/chain")

        assert engine.url.get_backend_name() == "postgresql"


class TestCreateTables:
    """Tests for create_tables function."""

    @pytest.mark.asyncio
    async def test_creates_schema(self, tmp_path: Path) -> None:
        """Test the three tables are created and re-running is harmless."""
        engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'schema.db'}")
        try:
            await create_tables(engine)
            await create_tables(engine)

            async with engine.connect() as conn:
                tables = await conn.run_sync(
                    lambda sync_conn: inspect(sync_conn).get_table_names()
                )
        finally:
            await engine.dispose()

        assert {"blocks", "transactions", "logs"} <= set(tables)
        assert {"blocks", "transactions", "logs"} <= set(Base.metadata.tables)
