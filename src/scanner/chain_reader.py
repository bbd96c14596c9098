"""Typed access to blocks and receipts served by an Ethereum node.

The reader performs no filtering and no retries; every failure is reported as
a ChainReadError and the caller decides how much work to abandon.
"""

from typing import Any

import httpx

from src.data.blocks.models import Block
from src.data.logs.models import LogEntry
from src.data.transactions.models import Receipt, Transaction
from src.helpers.parsers import (
    parse_hex_int,
    parse_hex_timestamp,
    parse_optional_hex_int,
)
from src.helpers.rpc import RPCClient
from src.scanner.errors import ChainReadError


def parse_transaction(tx_data: dict[str, Any]) -> Transaction:
    """Parse a transaction object of eth_getBlockByNumber into a model."""
    return Transaction(
        hash=tx_data["hash"],
        block_number=parse_hex_int(tx_data["blockNumber"]),
        from_address=tx_data["from"],
        to_address=tx_data.get("to"),
        value=parse_hex_int(tx_data.get("value")),
        gas_price=parse_optional_hex_int(tx_data.get("gasPrice")),
    )


def parse_block(block_data: dict[str, Any]) -> Block:
    """Parse a full eth_getBlockByNumber payload into a Block model.

    Raises:
        ValueError: If the payload carries transaction hashes instead of objects
    """
    transactions = block_data.get("transactions", [])
    if any(isinstance(tx, str) for tx in transactions):
        msg = "Block payload contains transaction hashes, not objects"
        raise ValueError(msg)

    return Block(
        number=parse_hex_int(block_data["number"]),
        hash=block_data["hash"],
        timestamp=parse_hex_timestamp(block_data["timestamp"]),
        difficulty=parse_hex_int(block_data.get("difficulty")),
        gas_limit=parse_hex_int(block_data["gasLimit"]),
        gas_used=parse_hex_int(block_data["gasUsed"]),
        transactions=[parse_transaction(tx) for tx in transactions],
    )


def parse_log(log_data: dict[str, Any]) -> LogEntry:
    """Parse a log object of a receipt into a LogEntry model."""
    return LogEntry(
        address=log_data["address"],
        topics=list(log_data.get("topics", [])),
        data=log_data.get("data") or "0x",
        log_index=parse_optional_hex_int(log_data.get("logIndex")),
    )


def parse_receipt(receipt_data: dict[str, Any]) -> Receipt:
    """Parse an eth_getTransactionReceipt payload into a Receipt model."""
    return Receipt(
        transaction_hash=receipt_data["transactionHash"],
        gas_used=parse_optional_hex_int(receipt_data.get("gasUsed")),
        status=parse_optional_hex_int(receipt_data.get("status")),
        logs=[parse_log(log) for log in receipt_data.get("logs", [])],
    )


class ChainReader:
    """Fetches blocks, receipts and the chain head through an RPC client."""

    def __init__(self, rpc: RPCClient, client: httpx.AsyncClient) -> None:
        """Initialize the reader.

        Args:
            rpc: JSON-RPC client bound to the node URL
            client: HTTP client shared by every request of the run
        """
        self.rpc = rpc
        self.client = client

    async def get_block_number(self) -> int:
        """Get the current chain head height.

        Raises:
            ChainReadError: If the node cannot be reached or answers with an error
        """
        try:
            return await self.rpc.get_block_number(self.client)
        except (httpx.HTTPError, TypeError, ValueError) as e:
            msg = f"Failed to read chain head: {e}"
            raise ChainReadError(msg, method="eth_blockNumber") from e

    async def fetch_block(self, block_number: int) -> Block:
        """Fetch a block with its full transaction list.

        Raises:
            ChainReadError: If the node is unreachable, answers with an error or
                does not have the block yet
        """
        try:
            block_data = await self.rpc.get_block(self.client, block_number)
        except (httpx.HTTPError, ValueError) as e:
            msg = f"Failed to fetch block {block_number}: {e}"
            raise ChainReadError(msg, method="eth_getBlockByNumber") from e

        if block_data is None:
            msg = f"Block {block_number} is not available"
            raise ChainReadError(msg, method="eth_getBlockByNumber")

        try:
            return parse_block(block_data)
        except (KeyError, TypeError, ValueError) as e:
            msg = f"Malformed block {block_number}: {e}"
            raise ChainReadError(msg, method="eth_getBlockByNumber") from e

    async def fetch_receipt(self, tx_hash: str) -> Receipt:
        """Fetch the receipt of a transaction with its logs.

        Raises:
            ChainReadError: If the node is unreachable, answers with an error or
                does not know the transaction
        """
        try:
            receipt_data = await self.rpc.get_transaction_receipt(self.client, tx_hash)
        except (httpx.HTTPError, ValueError) as e:
            msg = f"Failed to fetch receipt {tx_hash}: {e}"
            raise ChainReadError(msg, method="eth_getTransactionReceipt") from e

        if receipt_data is None:
            msg = f"Receipt {tx_hash} is not available"
            raise ChainReadError(msg, method="eth_getTransactionReceipt")

        try:
            return parse_receipt(receipt_data)
        except (KeyError, TypeError, ValueError) as e:
            msg = f"Malformed receipt {tx_hash}: {e}"
            raise ChainReadError(msg, method="eth_getTransactionReceipt") from e


__all__ = [
    "ChainReader",
    "parse_block",
    "parse_log",
    "parse_receipt",
    "parse_transaction",
]
