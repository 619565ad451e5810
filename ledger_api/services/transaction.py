"""
Transaction service: create, update, lookup, delete and running balance.
Validation happens here, before anything reaches storage.
"""
import logging
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from ledger_api.models import Transaction
from ledger_api.repositories import TransactionStore

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _is_blank(text: str | None) -> bool:
    return text is None or text.strip() == ""


class TransactionService:
    def __init__(
        self,
        repository: TransactionStore,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.clock = clock

    def _reject(self, message: str) -> ValidationError:
        logger.warning("Rejected transaction request: %s", message)
        return ValidationError(message)

    async def create(self, transaction: Transaction | None) -> Transaction:
        """
        Store a new transaction. The id is assigned by storage and
        created_at is stamped here; whatever the caller sent is ignored.
        """
        if transaction is None:
            raise self._reject("The transaction is null")
        if transaction.id is not None:
            raise self._reject("The transaction id is not null")
        if _is_blank(transaction.description):
            raise self._reject("The transaction description is blank")

        transaction.created_at = self.clock()
        stored = await self.repository.save(transaction)
        logger.info("Created transaction %s", stored.id)
        return stored

    async def update(self, transaction: Transaction | None) -> Transaction:
        """
        Overwrite an existing transaction and refresh its created_at.
        Existence is checked before the save, without a lock.
        """
        if transaction is None:
            raise self._reject("The transaction is null")
        if transaction.id is None:
            raise self._reject("The transaction id is null")
        if _is_blank(transaction.description):
            raise self._reject("The transaction description is blank")
        if not await self.repository.exists_by_id(transaction.id):
            raise self._reject(f"The transaction id does not exist: {transaction.id}")

        transaction.created_at = self.clock()
        stored = await self.repository.save(transaction)
        logger.info("Updated transaction %s", stored.id)
        return stored

    async def find_by_id(self, transaction_id: UUID) -> Transaction | None:
        return await self.repository.find_by_id(transaction_id)

    async def find_all(self) -> list[Transaction]:
        """All transactions, most recent first."""
        return await self.repository.find_all_ordered_by_created_at_desc()

    async def delete_by_id(self, transaction_id: UUID | None) -> None:
        if transaction_id is None:
            raise self._reject("The transaction is null")
        if not await self.repository.exists_by_id(transaction_id):
            raise self._reject(f"The transaction id does not exist: {transaction_id}")

        await self.repository.delete_by_id(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)

    async def get_current_balance(self) -> Decimal:
        return await self.repository.sum_of_amounts()
