"""Bounded backward scan of the most recent blocks for one contract.

Run lifecycle:
1. Init - open the HTTP client and the store, read the chain head
2. Scanning - process head - depth .. head one block at a time, pausing
   between blocks whatever the outcome
3. Draining - close the store and the HTTP client, even after an error
4. Done - report run statistics
"""

from asyncio import sleep
from enum import StrEnum

import httpx
from pydantic import BaseModel, Field
from rich.console import Console

from src.data.store import Store
from src.helpers.config import ScanSettings
from src.helpers.http import create_http_client, log_and_suppress_errors
from src.helpers.logging import get_logger
from src.helpers.progress import describe_block, track_progress
from src.helpers.rpc import RPCClient
from src.scanner.chain_reader import ChainReader
from src.scanner.errors import ChainReadError, FatalInitError, StoreError
from src.scanner.processor import BlockProcessor


logger = get_logger(__name__)


class ScanState(StrEnum):
    """Phase of a scan run."""

    INIT = "init"
    SCANNING = "scanning"
    DRAINING = "draining"
    DONE = "done"


class ScanStats(BaseModel):
    """Run-level totals reported when a scan finishes."""

    start_block: int
    end_block: int
    succeeded: int = 0
    failed: int = 0
    failed_blocks: list[int] = Field(default_factory=list)
    contract_tx_count: int = 0

    @property
    def blocks_scanned(self) -> int:
        """Number of blocks in the scanned range."""
        return self.end_block - self.start_block + 1


def compute_scan_range(head: int, depth: int) -> tuple[int, int]:
    """Return the inclusive (start, end) range ending at the chain head.

    Example:
        >>> compute_scan_range(1000, 100)
        (900, 1000)
        >>> compute_scan_range(20, 100)
        (0, 20)
    """
    return max(head - depth, 0), head


class Scanner:
    """Drives one scan run over the latest blocks."""

    def __init__(
        self,
        settings: ScanSettings,
        *,
        reader: ChainReader | None = None,
        store: Store | None = None,
        console: Console | None = None,
        show_progress: bool = True,
    ) -> None:
        """Initialize the scanner.

        Args:
            settings: Run parameters
            reader: Chain reader to use instead of one built from settings.rpc_url
            store: Unopened store to use instead of one built from
                settings.database_url
            console: Rich console for status output
            show_progress: Render a progress bar while scanning
        """
        self.settings = settings
        self.reader = reader
        self.store = store or Store(settings.database_url, settings.target_address)
        self.console = console or Console()
        self.show_progress = show_progress
        self.state = ScanState.INIT
        self.http_client: httpx.AsyncClient | None = None

    async def _init(self) -> tuple[int, int]:
        """Open resources and compute the scan range.

        Raises:
            FatalInitError: If the node or the storage cannot be reached
        """
        if self.reader is None:
            self.http_client = create_http_client()
            rpc = RPCClient(self.settings.rpc_url)
            self.reader = ChainReader(rpc, self.http_client)

        try:
            await self.store.open()
        except StoreError as e:
            msg = f"Cannot open storage: {e}"
            raise FatalInitError(msg) from e

        try:
            head = await self.reader.get_block_number()
        except ChainReadError as e:
            msg = f"Cannot read chain head: {e}"
            raise FatalInitError(msg) from e

        self.console.print(f"[cyan]Latest block: {head:,}[/cyan]")
        return compute_scan_range(head, self.settings.scan_depth)

    async def _scan(self, start_block: int, end_block: int) -> ScanStats:
        assert self.reader is not None  # Set in _init
        processor = BlockProcessor(
            self.reader, self.store, self.settings.target_address
        )
        stats = ScanStats(start_block=start_block, end_block=end_block)

        self.console.print(
            f"[cyan]Scanning blocks {start_block:,} to {end_block:,}[/cyan]"
        )

        with track_progress(
            "Scanning blocks",
            total=stats.blocks_scanned,
            console=self.console,
            disable=not self.show_progress,
        ) as (progress, task_id):
            for block_number in range(start_block, end_block + 1):
                ok = await processor.process_block(block_number)

                result = processor.last_result
                if ok:
                    stats.succeeded += 1
                    if result is not None:
                        stats.contract_tx_count += result.contract_tx_count
                else:
                    stats.failed += 1
                    stats.failed_blocks.append(block_number)

                describe_block(progress, task_id, block_number, ok=ok)
                await sleep(self.settings.block_delay)

        return stats

    async def _drain(self) -> None:
        if self.store.is_open:
            async with log_and_suppress_errors(
                "Closing store", log_level="error", log=logger
            ):
                await self.store.close()
                self.console.print("Database connection closed")

        if self.http_client is not None:
            async with log_and_suppress_errors("Closing HTTP client", log=logger):
                await self.http_client.aclose()
            self.http_client = None

    async def run(self) -> ScanStats:
        """Run the scan to completion of its range.

        Returns:
            ScanStats: Totals of the run

        Raises:
            FatalInitError: If the run could not start; nothing was scanned
        """
        self.state = ScanState.INIT
        self.console.print(
            f"[bold blue]Target contract: {self.settings.target_address}[/bold blue]"
        )

        try:
            start_block, end_block = await self._init()
            self.state = ScanState.SCANNING
            stats = await self._scan(start_block, end_block)
        finally:
            self.state = ScanState.DRAINING
            await self._drain()
            self.state = ScanState.DONE

        self.console.print(
            f"\n[bold green]✓ Scan completed[/bold green] - "
            f"Processed {stats.blocks_scanned:,} blocks "
            f"({stats.succeeded:,} ok, {stats.failed:,} failed, "
            f"{stats.contract_tx_count:,} contract-related transactions)"
        )
        if stats.failed_blocks:
            logger.warning("Failed blocks: %s", stats.failed_blocks)

        return stats


__all__ = [
    "ScanState",
    "ScanStats",
    "Scanner",
    "compute_scan_range",
]
