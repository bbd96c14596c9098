"""Pytest configuration and shared fixtures for scanner tests."""

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

from src.data.blocks.models import Block
from src.data.logs.models import LogEntry
from src.data.store import Store
from src.data.transactions.models import Receipt, Transaction
from src.scanner.errors import ChainReadError


TARGET = "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512"
OTHER = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
SENDER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class FakeChainReader:
    """In-memory stand-in for ChainReader serving prepared blocks and receipts."""

    def __init__(self, head: int = 0) -> None:
        self.head = head
        self.blocks: dict[int, Block] = {}
        self.receipts: dict[str, Receipt] = {}
        self.failing_blocks: set[int] = set()
        self.failing_receipts: set[str] = set()
        self.head_error: Exception | None = None
        self.fetched_blocks: list[int] = []

    def add_block(self, block: Block, receipts: list[Receipt] | None = None) -> None:
        self.blocks[block.number] = block
        for receipt in receipts or []:
            self.receipts[receipt.transaction_hash] = receipt
        self.head = max(self.head, block.number)

    async def get_block_number(self) -> int:
        if self.head_error is not None:
            raise self.head_error
        return self.head

    async def fetch_block(self, block_number: int) -> Block:
        self.fetched_blocks.append(block_number)
        if block_number in self.failing_blocks or block_number not in self.blocks:
            msg = f"Block {block_number} is not available"
            raise ChainReadError(msg, method="eth_getBlockByNumber")
        return self.blocks[block_number]

    async def fetch_receipt(self, tx_hash: str) -> Receipt:
        if tx_hash in self.failing_receipts or tx_hash not in self.receipts:
            msg = f"Receipt {tx_hash} is not available"
            raise ChainReadError(msg, method="eth_getTransactionReceipt")
        return self.receipts[tx_hash]


def tx_hash_for(label: str) -> str:
    """Build a deterministic 32-byte hash from a short label."""
    return "0x" + label.encode().hex().rjust(64, "0")


@pytest.fixture
def target_address() -> str:
    """Tracked contract address in mixed (checksum) case."""
    return TARGET


@pytest.fixture
def make_log() -> Callable[..., LogEntry]:
    """Factory for log entries."""

    def _make(address: str = TARGET, **overrides: Any) -> LogEntry:
        fields: dict[str, Any] = {
            "address": address,
            "topics": [
                "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
            ],
            "data": "0x" + "00" * 31 + "01",
            "log_index": 0,
        }
        fields.update(overrides)
        return LogEntry(**fields)

    return _make


@pytest.fixture
def make_tx() -> Callable[..., Transaction]:
    """Factory for transactions."""

    def _make(label: str, to: str | None, block_number: int = 100) -> Transaction:
        return Transaction(
            hash=tx_hash_for(label),
            block_number=block_number,
            from_address=SENDER,
            to_address=to,
            value=10**18,
            gas_price=30 * 10**9,
        )

    return _make


@pytest.fixture
def make_receipt() -> Callable[..., Receipt]:
    """Factory for receipts of a given transaction."""

    def _make(tx: Transaction, logs: list[LogEntry] | None = None) -> Receipt:
        return Receipt(
            transaction_hash=tx.hash, gas_used=21_000, status=1, logs=logs or []
        )

    return _make


@pytest.fixture
def make_block() -> Callable[..., Block]:
    """Factory for blocks holding the given transactions."""

    def _make(number: int, transactions: list[Transaction] | None = None) -> Block:
        return Block(
            number=number,
            hash="0x" + f"{number:x}".rjust(64, "0"),
            timestamp=datetime(2024, 1, 1, tzinfo=UTC),
            difficulty=0,
            gas_limit=30_000_000,
            gas_used=15_000_000,
            transactions=transactions or [],
        )

    return _make


@pytest.fixture
def fake_reader() -> FakeChainReader:
    """Empty in-memory chain."""
    return FakeChainReader()


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """SQLite database file private to one test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'scanner.db'}"


@pytest_asyncio.fixture
async def store(database_url: str, target_address: str) -> AsyncGenerator[Store]:
    """Open store on a fresh SQLite file, closed after the test."""
    store = Store(database_url, target_address)
    await store.open()

    yield store

    if store.is_open:
        await store.close()
