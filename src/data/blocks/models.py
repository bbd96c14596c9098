"""Pydantic models for Ethereum blocks."""

# Pydantic needs this at runtime to validate the datetime field
from datetime import datetime

from pydantic import BaseModel, Field

from src.data.transactions.models import Transaction


class Block(BaseModel):
    """Ethereum block model with its full transaction list."""

    number: int
    hash: str
    timestamp: datetime
    difficulty: int = 0
    gas_limit: int
    gas_used: int
    transactions: list[Transaction] = Field(default_factory=list)
