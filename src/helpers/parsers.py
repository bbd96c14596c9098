"""Parsing utilities for JSON-RPC hex payloads."""

from datetime import UTC, datetime


def parse_hex_int(hex_value: str | None, default: int = 0) -> int:
    """Parse hex string to integer.

    Args:
        hex_value: Hex-encoded string or None
        default: Default value if hex_value is None

    Returns:
        int: Parsed integer value

    Example:
        >>> parse_hex_int("0xff")
        255
        >>> parse_hex_int(None, 0)
        0
    """
    if hex_value is None:
        return default
    return int(hex_value, 16)


def parse_optional_hex_int(hex_value: str | None) -> int | None:
    """Parse hex string to integer, keeping None as None.

    Example:
        >>> parse_optional_hex_int("0x5208")
        21000
        >>> parse_optional_hex_int(None) is None
        True
    """
    if hex_value is None:
        return None
    return int(hex_value, 16)


def parse_hex_timestamp(hex_timestamp: str) -> datetime:
    """Parse Unix timestamp from hex string to datetime.

    Args:
        hex_timestamp: Hex-encoded Unix timestamp string

    Returns:
        datetime: Timezone-aware UTC datetime

    Example:
        >>> parse_hex_timestamp("0x63a1b2c3")
        datetime.datetime(2022, 12, 20, ...)
    """
    return datetime.fromtimestamp(int(hex_timestamp, 16), tz=UTC)


def wei_to_text(wei: int | None) -> str:
    """Serialize a wei amount as a decimal string.

    Wei values exceed 64-bit integer columns, so they are stored as text.

    Example:
        >>> wei_to_text(10**20)
        '100000000000000000000'
        >>> wei_to_text(None)
        '0'
    """
    return str(wei) if wei is not None else "0"
