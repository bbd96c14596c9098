"""Configuration management and environment variable utilities."""

import os
import re

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from src.helpers.constants import (
    ADDRESS_HEX_LENGTH,
    DEFAULT_BLOCK_DELAY,
    DEFAULT_DATABASE_URL,
    DEFAULT_POSTGRE_PORT,
    DEFAULT_SCAN_DEPTH,
)


# Load environment variables from .env file
load_dotenv()

ADDRESS_PATTERN = re.compile(rf"^0x[0-9a-fA-F]{{{ADDRESS_HEX_LENGTH}}}$")


def get_required_env(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ValueError: If the environment variable is not set

    Example:
        ```python
        from src.helpers.config import get_required_env

        target = get_required_env("TARGET_CONTRACT_ADDRESS")
        ```
    """
    value = os.getenv(key)
    if not value:
        msg = f"{key} environment variable is not set"
        raise ValueError(msg)
    return value


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_eth_rpc_url(rpc_url: str | None = None) -> str:
    """Get Ethereum RPC URL from parameter or environment.

    Args:
        rpc_url: Optional RPC URL to use directly

    Returns:
        Ethereum RPC URL

    Raises:
        ValueError: If RPC URL is not provided and ETH_RPC_URL env var is not set

    Example:
        ```python
        from src.helpers.config import get_eth_rpc_url

        # Get from environment
        rpc_url = get_eth_rpc_url()

        # Or provide explicitly
        rpc_url = get_eth_rpc_url("http://127.0.0.1:8545")
        ```
    """
    if rpc_url:
        return rpc_url

    env_rpc_url = os.getenv("ETH_RPC_URL")
    if not env_rpc_url:
        msg = "ETH_RPC_URL must be provided or set in environment variables"
        raise ValueError(msg)

    return env_rpc_url


def validate_address(address: str) -> str:
    """Check that a string is a 0x-prefixed 20-byte hex address.

    Args:
        address: Address to validate, in any letter case

    Returns:
        The address unchanged

    Raises:
        ValueError: If the address is malformed
    """
    if not ADDRESS_PATTERN.match(address):
        msg = f"Invalid contract address: {address!r}"
        raise ValueError(msg)
    return address


def get_target_contract_address(address: str | None = None) -> str:
    """Get the tracked contract address from parameter or environment.

    Args:
        address: Optional address to use directly

    Returns:
        Target contract address

    Raises:
        ValueError: If no address is configured or the address is malformed
    """
    if address:
        return validate_address(address)

    return validate_address(get_required_env("TARGET_CONTRACT_ADDRESS"))


def get_database_url(database_url: str | None = None) -> str:
    """Get the database URL from parameter or environment.

    Resolution order: explicit argument, DATABASE_URL, POSTGRE_* variables,
    then the local SQLite file.

    Args:
        database_url: Optional SQLAlchemy URL to use directly

    Returns:
        str: SQLAlchemy async database URL

    Raises:
        ValueError: If POSTGRE_HOST is set but other PostgreSQL settings are missing
    """
    if database_url:
        return database_url

    env_database_url = os.getenv("DATABASE_URL")
    if env_database_url:
        return env_database_url

    postgre_host = os.getenv("POSTGRE_HOST")
    if not postgre_host:
        return DEFAULT_DATABASE_URL

    postgre_port = os.getenv("POSTGRE_PORT", DEFAULT_POSTGRE_PORT)
    postgre_user = get_required_env("POSTGRE_USER")
    postgre_password = get_required_env("POSTGRE_PASSWORD")
    postgre_db = get_required_env("POSTGRE_DB")

    # Use psycopg (version 3) as the async PostgreSQL driver
    return (
        "postgresql+psycopg://"
        f"{postgre_user}:{postgre_password}"
        f"@{postgre_host}:{postgre_port}"
        f"/{postgre_db}"
    )


class ScanSettings(BaseModel):
    """Run parameters for a single scan."""

    rpc_url: str = Field(..., description="Ethereum JSON-RPC endpoint")
    target_address: str = Field(..., description="Tracked contract address")
    database_url: str = Field(default=DEFAULT_DATABASE_URL)
    scan_depth: int = Field(default=DEFAULT_SCAN_DEPTH, ge=0)
    block_delay: float = Field(default=DEFAULT_BLOCK_DELAY, ge=0.0)

    @classmethod
    def from_env(cls) -> "ScanSettings":
        """Build settings from environment variables.

        Raises:
            ValueError: If a required variable is missing or malformed
        """
        return cls(
            rpc_url=get_eth_rpc_url(),
            target_address=get_target_contract_address(),
            database_url=get_database_url(),
            scan_depth=int(get_optional_env("SCAN_DEPTH", str(DEFAULT_SCAN_DEPTH))),
            block_delay=float(
                get_optional_env("BLOCK_DELAY_SECONDS", str(DEFAULT_BLOCK_DELAY))
            ),
        )


__all__ = [
    "ScanSettings",
    "get_database_url",
    "get_eth_rpc_url",
    "get_optional_env",
    "get_required_env",
    "get_target_contract_address",
    "validate_address",
]
