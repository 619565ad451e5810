from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from ledger_api.models import Transaction

# Decimal in, JSON number out
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TransactionRequest(CamelModel):
    id: UUID | None = Field(None, description="Absent on create, required on update")
    amount: Amount = Field(..., description="Signed amount: positive = credit, negative = debit")
    description: str | None = Field(None, description="Non-blank label")
    created_at: datetime | None = Field(None, description="Ignored; always set by the server")

    def to_entity(self) -> Transaction:
        transaction = Transaction(amount=self.amount, description=self.description)
        if self.id is not None:
            transaction.id = self.id
        return transaction


class TransactionResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    amount: Amount
    description: str


class BalanceResponse(CamelModel):
    date_time: datetime
    balance: Amount


class ErrorResponse(CamelModel):
    date_time: datetime
    http_status: str
    message: str
