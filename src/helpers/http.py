"""HTTP client utilities and helpers."""

import logging

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from typing import Any

import httpx

from src.helpers.constants import (
    CONNECTION_TIMEOUT,
    DEFAULT_TIMEOUT,
    MAX_CONNECTIONS,
    MAX_KEEPALIVE_CONNECTIONS,
)
from src.helpers.logging import get_logger


logger = get_logger(__name__)


def create_http_client(
    timeout: float = DEFAULT_TIMEOUT, **kwargs: Any
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient for JSON-RPC traffic.

    The pool is capped so that the per-block receipt fan-out cannot open an
    unbounded number of sockets against the node.

    Args:
        timeout: Default timeout in seconds (default: DEFAULT_TIMEOUT)
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance

    Example:
        ```python
        from src.helpers.http import create_http_client

        async with create_http_client(timeout=60.0) as client:
            block = await rpc.get_block(client, 19_000_000)
        ```
    """
    kwargs.setdefault(
        "limits",
        httpx.Limits(
            max_connections=MAX_CONNECTIONS,
            max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
        ),
    )
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=CONNECTION_TIMEOUT), **kwargs
    )


@asynccontextmanager
async def log_and_suppress_errors(
    operation_name: str,
    *,
    log_level: str = "warning",
    log: logging.Logger | None = None,
) -> AsyncIterator[None]:
    """Context manager to log and suppress errors.

    Args:
        operation_name: Description of the operation for logging
        log_level: Logging level ("debug", "info", "warning", "error")
        log: Logger to report through (default: this module's logger)

    Yields:
        None

    Example:
        ```python
        from src.helpers.http import log_and_suppress_errors

        async with log_and_suppress_errors("close store", log_level="error"):
            await store.close()
        ```
    """
    target = log or logger
    try:
        yield
    except Exception as e:
        log_method = getattr(target, log_level, target.warning)
        log_method("%s failed: %s", operation_name, e)


__all__ = [
    "create_http_client",
    "log_and_suppress_errors",
]
