"""Common configuration constants used across the application."""

# Scan Range Constants
DEFAULT_SCAN_DEPTH = 100
"""Number of blocks behind the chain head where a scan starts"""

DEFAULT_BLOCK_DELAY = 0.1
"""Pause between two processed blocks in seconds"""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default HTTP request timeout in seconds"""

CONNECTION_TIMEOUT = 3.0
"""Timeout for establishing connections"""

# HTTP Connection Pooling
MAX_KEEPALIVE_CONNECTIONS = 5
"""Maximum number of keepalive connections in pool"""

MAX_CONNECTIONS = 10
"""Maximum total number of connections"""

# Database Constants
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./blockchain_data.db"
"""SQLite file used when no other database is configured"""

DEFAULT_POSTGRE_PORT = "5432"
"""PostgreSQL port used when POSTGRE_PORT is not set"""

# Chain Constants
ADDRESS_HEX_LENGTH = 40
"""Number of hex characters in an Ethereum address (without 0x)"""


__all__ = [
    "ADDRESS_HEX_LENGTH",
    "CONNECTION_TIMEOUT",
    "DEFAULT_BLOCK_DELAY",
    "DEFAULT_DATABASE_URL",
    "DEFAULT_POSTGRE_PORT",
    "DEFAULT_SCAN_DEPTH",
    "DEFAULT_TIMEOUT",
    "MAX_CONNECTIONS",
    "MAX_KEEPALIVE_CONNECTIONS",
]
