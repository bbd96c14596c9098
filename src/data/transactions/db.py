"""Database models for contract-related transactions."""

from sqlalchemy import BigInteger, Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from src.helpers.db import Base


class TransactionDB(Base):
    """Transaction that touched the target contract."""

    __tablename__ = "transactions"

    hash: Mapped[str] = mapped_column(String(66), primary_key=True)
    block_number: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("blocks.number"), index=True
    )
    from_address: Mapped[str] = mapped_column(String(42), index=True)
    to_address: Mapped[str | None] = mapped_column(String(42), nullable=True)
    value: Mapped[str] = mapped_column(String)  # Wei as string
    gas_price: Mapped[str] = mapped_column(String)  # Wei as string
    gas_used: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    is_contract_related: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )
