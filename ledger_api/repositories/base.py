from abc import ABC, abstractmethod
from decimal import Decimal
from uuid import UUID

from ledger_api.models import Transaction


class TransactionStore(ABC):
    """
    Persistence capability the transaction service depends on.
    Implementations own id generation; callers own validation.
    """

    @abstractmethod
    async def save(self, transaction: Transaction) -> Transaction:
        """Insert when transaction.id is None, otherwise overwrite the row with that id."""

    @abstractmethod
    async def find_by_id(self, transaction_id: UUID) -> Transaction | None:
        pass

    @abstractmethod
    async def exists_by_id(self, transaction_id: UUID) -> bool:
        pass

    @abstractmethod
    async def delete_by_id(self, transaction_id: UUID) -> None:
        pass

    @abstractmethod
    async def find_all_ordered_by_created_at_desc(self) -> list[Transaction]:
        pass

    @abstractmethod
    async def sum_of_amounts(self) -> Decimal:
        """Sum of all amounts; zero when there are no transactions."""
