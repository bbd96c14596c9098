"""Database models for contract event logs."""

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.helpers.db import Base


class LogDB(Base):
    """Event log of a contract-related transaction."""

    __tablename__ = "logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    transaction_hash: Mapped[str] = mapped_column(
        String(66), ForeignKey("transactions.hash"), index=True
    )
    address: Mapped[str] = mapped_column(String(42), index=True)
    topics: Mapped[str] = mapped_column(Text)  # JSON array of hex strings
    data: Mapped[str] = mapped_column(Text)
    is_target_contract: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )
