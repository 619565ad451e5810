from ledger_api.schemas.transaction import (
    BalanceResponse,
    ErrorResponse,
    TransactionRequest,
    TransactionResponse,
)

__all__ = [
    "BalanceResponse",
    "ErrorResponse",
    "TransactionRequest",
    "TransactionResponse",
]
