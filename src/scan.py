"""Scan the latest blocks for activity of one contract.

Reads its settings from the environment (or a .env file):
    ETH_RPC_URL              JSON-RPC endpoint of the node
    TARGET_CONTRACT_ADDRESS  Contract to track
    SCAN_DEPTH               Blocks behind the head to start from (default 100)
    BLOCK_DELAY_SECONDS      Pause between blocks (default 0.1)
    DATABASE_URL             SQLAlchemy async URL (default local SQLite file)

Usage:
    python -m src.scan
    contract-scanner
"""

import asyncio
import sys

from src.helpers.config import ScanSettings
from src.helpers.logging import get_logger
from src.scanner.scanner import Scanner


logger = get_logger(__name__)


async def main() -> None:
    """Main entry point."""
    try:
        settings = ScanSettings.from_env()
        scanner = Scanner(settings)
        await scanner.run()
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt, exiting...")
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
