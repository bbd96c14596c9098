"""Pydantic models for Ethereum transactions and receipts."""

from pydantic import BaseModel, Field

from src.data.logs.models import LogEntry


class Transaction(BaseModel):
    """Transaction as included in a block."""

    hash: str
    block_number: int
    from_address: str
    to_address: str | None = Field(
        default=None, description="Recipient, None for contract creation"
    )
    value: int = Field(default=0, description="Transferred value in wei")
    gas_price: int | None = Field(default=None, description="Gas price in wei")


class Receipt(BaseModel):
    """Execution result of a transaction."""

    transaction_hash: str
    gas_used: int | None = None
    status: int | None = None
    logs: list[LogEntry] = Field(default_factory=list)
