"""Pydantic models for contract event logs."""

from pydantic import BaseModel, Field


class LogEntry(BaseModel):
    """Event log emitted during transaction execution."""

    address: str = Field(..., description="Emitting contract address")
    topics: list[str] = Field(
        default_factory=list, description="Indexed topics as 32-byte hex strings"
    )
    data: str = Field(default="0x", description="Non-indexed payload as hex")
    log_index: int | None = Field(default=None, description="Position in the block")
