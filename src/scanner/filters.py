"""Rules deciding which transactions and logs concern the target contract."""

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Iterable

    from src.data.logs.models import LogEntry
    from src.data.transactions.models import Receipt, Transaction


def addresses_match(address: str | None, target: str) -> bool:
    """Compare two hex addresses ignoring letter case.

    Example:
        >>> addresses_match("0xAbC0000000000000000000000000000000000001",
        ...                 "0xabc0000000000000000000000000000000000001")
        True
        >>> addresses_match(None, "0xabc0000000000000000000000000000000000001")
        False
    """
    if not address:
        return False
    return address.lower() == target.lower()


def is_contract_related(
    tx: "Transaction", receipt: "Receipt | None", target: str
) -> bool:
    """Decide whether a transaction touches the target contract.

    A transaction is related when it is sent to the target, or when its
    receipt holds at least one log emitted by the target. Without a receipt
    only the recipient can be checked.

    Args:
        tx: Transaction from the block body
        receipt: Receipt of the transaction, None if it could not be fetched
        target: Target contract address

    Returns:
        bool: True if the transaction is contract-related
    """
    if addresses_match(tx.to_address, target):
        return True

    if receipt is None:
        return False

    return any(addresses_match(log.address, target) for log in receipt.logs)


def filter_target_logs(logs: "Iterable[LogEntry]", target: str) -> "list[LogEntry]":
    """Keep the logs emitted by the target contract, in their original order."""
    return [log for log in logs if addresses_match(log.address, target)]


__all__ = [
    "addresses_match",
    "filter_target_logs",
    "is_contract_related",
]
