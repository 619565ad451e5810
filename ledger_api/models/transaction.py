from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from sqlalchemy import DateTime, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ledger_api.database import Base


class Transaction(Base):
    """Single ledger entry. Positive amount = credit, negative = debit."""

    __tablename__ = "transaction"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column("date_time", DateTime(timezone=True), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(20, 4), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return (
            f"Transaction(id={self.id}, created_at={self.created_at!r}, "
            f"amount={self.amount}, description={self.description!r})"
        )
