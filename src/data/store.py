"""Relational store for scanned blocks, transactions and logs.

Rows are insert-only. Every write runs in its own short session so that the
concurrent writes issued for one block never share a transaction.
"""

import asyncio
import json

from typing import TYPE_CHECKING, Any, Self

from sqlalchemy import func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.data.blocks.db import BlockDB
from src.data.logs.db import LogDB
from src.data.transactions.db import TransactionDB
from src.helpers.db import create_engine, create_tables
from src.helpers.logging import get_logger
from src.helpers.parsers import wei_to_text
from src.scanner.errors import LogInsertError, StoreError
from src.scanner.filters import addresses_match, filter_target_logs


if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import TracebackType

    from src.data.blocks.models import Block
    from src.data.logs.models import LogEntry
    from src.data.transactions.models import Receipt, Transaction


logger = get_logger(__name__)


class Store:
    """Owns the schema and every write of a scan run.

    Lifecycle is explicit: ``open()`` creates the engine and the tables,
    ``close()`` disposes of the engine. A store is used by exactly one run.

    Example:
        ```python
        async with Store("sqlite+aiosqlite:///./blockchain_data.db", target) as store:
            await store.insert_block(block, contract_tx_count=2)
        ```
    """

    def __init__(
        self, database_url: str, target_address: str, *, echo: bool = False
    ) -> None:
        """Initialize the store without connecting.

        Args:
            database_url: SQLAlchemy async database URL
            target_address: Tracked contract address, used to flag log rows
            echo: Log emitted SQL statements
        """
        self.database_url = database_url
        self.target_address = target_address
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._sessions: async_sessionmaker[AsyncSession] | None = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        """Whether the store can accept reads and writes."""
        return self._engine is not None

    def _ensure_open(self) -> None:
        if self._engine is None:
            msg = "Store is closed" if self._closed else "Store is not open"
            raise StoreError(msg)

    def _session(self) -> AsyncSession:
        self._ensure_open()
        assert self._sessions is not None  # Set together with the engine
        return self._sessions()

    async def open(self) -> None:
        """Connect and create the tables if they do not exist.

        Raises:
            StoreError: If the store was already used or the database is unreachable
        """
        if self._engine is not None or self._closed:
            msg = "Store can only be opened once"
            raise StoreError(msg)

        engine: AsyncEngine | None = None
        try:
            engine = create_engine(self.database_url, echo=self.echo)
            await create_tables(engine)
        except (SQLAlchemyError, OSError) as e:
            if engine is not None:
                await engine.dispose()
            msg = f"Cannot open storage: {e}"
            raise StoreError(msg) from e

        self._engine = engine
        self._sessions = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.debug("Store opened")

    async def close(self) -> None:
        """Release the connection pool; the store is unusable afterwards.

        Raises:
            StoreError: If the store is not open
        """
        self._ensure_open()
        assert self._engine is not None
        engine = self._engine
        self._engine = None
        self._sessions = None
        self._closed = True
        await engine.dispose()
        logger.debug("Store closed")

    async def __aenter__(self) -> Self:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: "TracebackType | None",
    ) -> None:
        await self.close()

    async def _execute(self, stmt: Any, description: str) -> None:
        """Run one write statement in its own session and commit it.

        Raises:
            StoreError: If the statement fails
        """
        async with self._session() as session:
            try:
                await session.execute(stmt)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                msg = f"Failed to insert {description}: {e}"
                raise StoreError(msg) from e

    async def insert_block(self, block: "Block", contract_tx_count: int) -> None:
        """Insert a block row.

        Args:
            block: Block to persist (its transactions are not written here)
            contract_tx_count: Number of contract-related transactions in the block

        Raises:
            StoreError: If the block number is already stored or the write fails
        """
        stmt = insert(BlockDB).values(
            number=block.number,
            hash=block.hash,
            timestamp=block.timestamp,
            difficulty=block.difficulty,
            gas_limit=block.gas_limit,
            gas_used=block.gas_used,
            contract_tx_count=contract_tx_count,
        )
        await self._execute(stmt, f"block {block.number}")

    async def insert_transaction(
        self,
        tx: "Transaction",
        block_number: int,
        is_contract_related: bool,
        receipt: "Receipt | None" = None,
    ) -> None:
        """Insert a transaction row, then its target-contract logs.

        The logs of a contract-related transaction are filtered down to the
        ones emitted by the target contract and written with ``insert_logs``.
        The call returns once every log insert has settled.

        Args:
            tx: Transaction to persist
            block_number: Number of the already stored parent block
            is_contract_related: Classification of the transaction
            receipt: Receipt carrying gas used and logs, None if unavailable

        Raises:
            StoreError: If the transaction row cannot be written
            LogInsertError: If the row was written but some logs were not
        """
        stmt = insert(TransactionDB).values(
            hash=tx.hash,
            block_number=block_number,
            from_address=tx.from_address,
            to_address=tx.to_address,
            value=wei_to_text(tx.value),
            gas_price=wei_to_text(tx.gas_price),
            gas_used=receipt.gas_used if receipt is not None else None,
            is_contract_related=is_contract_related,
        )
        await self._execute(stmt, f"transaction {tx.hash}")

        if not is_contract_related or receipt is None or not receipt.logs:
            return

        target_logs = filter_target_logs(receipt.logs, self.target_address)
        if target_logs:
            await self.insert_logs(target_logs, tx.hash)

    async def _insert_log(self, log: "LogEntry", tx_hash: str) -> None:
        stmt = insert(LogDB).values(
            transaction_hash=tx_hash,
            address=log.address,
            topics=json.dumps(log.topics),
            data=log.data,
            is_target_contract=addresses_match(log.address, self.target_address),
        )
        await self._execute(stmt, f"log of transaction {tx_hash}")

    async def insert_logs(self, logs: "Sequence[LogEntry]", tx_hash: str) -> None:
        """Insert log rows concurrently and wait for all of them.

        Rows that succeeded stay committed when others fail.

        Args:
            logs: Logs to persist
            tx_hash: Hash of the already stored parent transaction

        Raises:
            LogInsertError: If at least one insert failed
        """
        results = await asyncio.gather(
            *[self._insert_log(log, tx_hash) for log in logs],
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, BaseException)]
        if not errors:
            return

        for error in errors:
            if not isinstance(error, StoreError):
                raise error
            logger.warning("%s", error)
        raise LogInsertError(
            tx_hash, failed=len(errors), total=len(logs)
        ) from errors[0]

    async def count_blocks(self) -> int:
        """Count stored blocks."""
        async with self._session() as session:
            result = await session.execute(select(func.count()).select_from(BlockDB))
            return result.scalar_one()

    async def get_block(self, block_number: int) -> BlockDB | None:
        """Get a stored block row by number."""
        async with self._session() as session:
            return await session.get(BlockDB, block_number)

    async def get_transactions(self, block_number: int) -> list[TransactionDB]:
        """Get the stored transactions of a block."""
        stmt = select(TransactionDB).where(TransactionDB.block_number == block_number)
        async with self._session() as session:
            result = await session.execute(stmt.order_by(TransactionDB.hash))
            return list(result.scalars().all())

    async def get_logs(self, tx_hash: str) -> list[LogDB]:
        """Get the stored logs of a transaction in insertion order."""
        stmt = select(LogDB).where(LogDB.transaction_hash == tx_hash)
        async with self._session() as session:
            result = await session.execute(stmt.order_by(LogDB.id))
            return list(result.scalars().all())


__all__ = ["Store"]
