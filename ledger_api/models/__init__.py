from ledger_api.models.transaction import Transaction

__all__ = [
    "Transaction",
]
