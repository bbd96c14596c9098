"""Exception hierarchy of the block scanner."""


class ScannerError(Exception):
    """Base class for every error raised by the scanner."""


class ChainReadError(ScannerError):
    """The node could not supply a block, receipt or chain head."""

    def __init__(self, message: str, *, method: str | None = None) -> None:
        super().__init__(message)
        self.method = method


class StoreError(ScannerError):
    """A write or read against the relational store failed."""


class LogInsertError(StoreError):
    """Some log rows of an already written transaction could not be inserted.

    Log rows are written independently, so storage may hold a subset of the
    transaction's logs when this is raised.
    """

    def __init__(self, transaction_hash: str, failed: int, total: int) -> None:
        super().__init__(
            f"{failed}/{total} log inserts failed for transaction {transaction_hash}"
        )
        self.transaction_hash = transaction_hash
        self.failed = failed
        self.total = total


class FatalInitError(ScannerError):
    """The run could not start: chain head or storage unavailable."""


__all__ = [
    "ChainReadError",
    "FatalInitError",
    "LogInsertError",
    "ScannerError",
    "StoreError",
]
