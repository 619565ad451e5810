from ledger_api.repositories.base import TransactionStore
from ledger_api.repositories.transaction import TransactionRepository

__all__ = [
    "TransactionRepository",
    "TransactionStore",
]
