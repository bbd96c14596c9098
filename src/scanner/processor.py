"""Per-block pipeline: fetch, classify, persist.

``process_block`` never raises. Chain and storage failures are logged and turned
into a False outcome so the caller can move on to the next block.
"""

import asyncio

from typing import TYPE_CHECKING

from pydantic import BaseModel

from src.helpers.logging import get_logger
from src.scanner.errors import ChainReadError
from src.scanner.filters import is_contract_related


if TYPE_CHECKING:
    from src.data.blocks.models import Block
    from src.data.store import Store
    from src.data.transactions.models import Receipt, Transaction
    from src.scanner.chain_reader import ChainReader


logger = get_logger(__name__)


class BlockResult(BaseModel):
    """Outcome of processing one block."""

    block_number: int
    success: bool
    transaction_count: int = 0
    contract_tx_count: int = 0


class BlockProcessor:
    """Processes one block at a time for a single target contract."""

    def __init__(
        self, reader: "ChainReader", store: "Store", target_address: str
    ) -> None:
        """Initialize the processor.

        Args:
            reader: Source of blocks and receipts
            store: Open store receiving the rows
            target_address: Tracked contract address
        """
        self.reader = reader
        self.store = store
        self.target_address = target_address
        self.last_result: BlockResult | None = None

    async def _fetch_receipt_or_none(self, tx: "Transaction") -> "Receipt | None":
        try:
            return await self.reader.fetch_receipt(tx.hash)
        except ChainReadError as e:
            logger.warning(
                "Receipt unavailable for %s, treating as no logs: %s", tx.hash, e
            )
            return None

    async def fetch_receipts(self, block: "Block") -> "list[Receipt | None]":
        """Fetch every receipt of a block concurrently.

        A receipt that cannot be fetched is replaced by None, in block order.
        """
        return await asyncio.gather(
            *[self._fetch_receipt_or_none(tx) for tx in block.transactions]
        )

    async def _persist(
        self, block: "Block", related: "list[tuple[Transaction, Receipt | None]]"
    ) -> None:
        """Write the block row, then every related transaction concurrently.

        Raises:
            StoreError: If the block or any transaction could not be written,
                after every transaction write has settled
        """
        await self.store.insert_block(block, contract_tx_count=len(related))

        if not related:
            return

        results = await asyncio.gather(
            *[
                self.store.insert_transaction(
                    tx, block.number, is_contract_related=True, receipt=receipt
                )
                for tx, receipt in related
            ],
            return_exceptions=True,
        )
        errors = [r for r in results if isinstance(r, BaseException)]
        for error in errors[1:]:
            logger.error("Block %s: %s", block.number, error)
        if errors:
            raise errors[0]

    async def process_block(self, block_number: int) -> bool:
        """Fetch, classify and persist one block.

        Args:
            block_number: Height of the block to process

        Returns:
            bool: True if the block row and every related transaction were written
        """
        self.last_result = BlockResult(block_number=block_number, success=False)

        try:
            block = await self.reader.fetch_block(block_number)
        except ChainReadError as e:
            logger.error("✗ Block %s failed: %s", block_number, e)
            return False
        except Exception:
            logger.exception("✗ Block %s failed to fetch", block_number)
            return False

        try:
            receipts = await self.fetch_receipts(block)
            related = [
                (tx, receipt)
                for tx, receipt in zip(block.transactions, receipts, strict=True)
                if is_contract_related(tx, receipt, self.target_address)
            ]
            self.last_result = BlockResult(
                block_number=block_number,
                success=False,
                transaction_count=len(block.transactions),
                contract_tx_count=len(related),
            )
            await self._persist(block, related)
        except Exception:
            logger.exception("✗ Block %s failed to persist", block_number)
            return False

        self.last_result.success = True
        if related:
            logger.info(
                "✓ Block %s processed - %d contract-related transactions",
                block_number,
                len(related),
            )
        else:
            logger.info(
                "✓ Block %s processed - no contract-related transactions",
                block_number,
            )

        return True


__all__ = [
    "BlockProcessor",
    "BlockResult",
]
