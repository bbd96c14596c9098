"""Ethereum JSON-RPC client utilities."""

from typing import Any

import httpx

from src.helpers.constants import DEFAULT_TIMEOUT
from src.helpers.parsers import parse_hex_int
from src.helpers.rpc_models import (
    EthBlockNumberRequest,
    EthGetBlockByNumberRequest,
    EthGetTransactionReceiptRequest,
    JsonRpcRequest,
    JsonRpcResponse,
)


class RPCClient:
    """Ethereum JSON-RPC client."""

    def __init__(self, rpc_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize RPC client.

        Args:
            rpc_url: Ethereum JSON-RPC endpoint URL
            timeout: Default timeout for requests in seconds

        Raises:
            ValueError: If rpc_url is empty or None
        """
        if not rpc_url:
            msg = "RPC URL cannot be empty"
            raise ValueError(msg)

        self.rpc_url = rpc_url
        self.timeout = timeout

    async def send(
        self,
        client: httpx.AsyncClient,
        request: JsonRpcRequest,
        *,
        timeout: float | None = None,
    ) -> Any:
        """Send a prepared JSON-RPC request.

        Args:
            client: HTTP client instance
            request: Request model to serialize as the POST body
            timeout: Optional timeout override

        Returns:
            RPC result value (None when the node has no data)

        Raises:
            httpx.HTTPError: If the HTTP request fails
            ValueError: If the RPC response contains an error
        """
        response = await client.post(
            self.rpc_url,
            json=request.model_dump(),
            timeout=timeout or self.timeout,
        )
        response.raise_for_status()
        result = JsonRpcResponse.model_validate(response.json())

        if result.error is not None:
            msg = f"RPC error: {result.error.code} {result.error.message}"
            raise ValueError(msg)

        return result.result

    async def get_block_number(self, client: httpx.AsyncClient) -> int:
        """Get the latest block number.

        Raises:
            ValueError: If the node returns no block number
        """
        result = await self.send(client, EthBlockNumberRequest())
        if result is None:
            msg = "eth_blockNumber returned no result"
            raise ValueError(msg)
        return parse_hex_int(result)

    async def get_block(
        self,
        client: httpx.AsyncClient,
        block_number: int,
        *,
        full_transactions: bool = True,
    ) -> dict[str, Any] | None:
        """Get a block by number.

        Args:
            client: HTTP client instance
            block_number: Block height
            full_transactions: Include transaction objects instead of hashes

        Returns:
            Raw block payload, or None if the node does not know the block yet
        """
        request = EthGetBlockByNumberRequest(
            params=[hex(block_number), full_transactions]
        )
        return await self.send(client, request)

    async def get_transaction_receipt(
        self, client: httpx.AsyncClient, tx_hash: str
    ) -> dict[str, Any] | None:
        """Get the receipt of a mined transaction.

        Returns:
            Raw receipt payload, or None if the transaction is unknown or pending
        """
        request = EthGetTransactionReceiptRequest(params=[tx_hash])
        return await self.send(client, request)


__all__ = ["RPCClient"]
