from decimal import Decimal
from uuid import UUID
from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from ledger_api.models import Transaction
from ledger_api.repositories.base import TransactionStore


class TransactionRepository(TransactionStore):
    """SQLAlchemy storage bound to one session. Writes flush; the session owner commits."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(self, transaction: Transaction) -> Transaction:
        if transaction.id is None:
            self.db.add(transaction)
            await self.db.flush()
            return transaction
        stored = await self.db.merge(transaction)
        await self.db.flush()
        return stored

    async def find_by_id(self, transaction_id: UUID) -> Transaction | None:
        result = await self.db.execute(select(Transaction).where(Transaction.id == transaction_id))
        return result.scalar_one_or_none()

    async def exists_by_id(self, transaction_id: UUID) -> bool:
        result = await self.db.execute(select(exists().where(Transaction.id == transaction_id)))
        return bool(result.scalar())

    async def delete_by_id(self, transaction_id: UUID) -> None:
        result = await self.db.execute(delete(Transaction).where(Transaction.id == transaction_id))
        if result.rowcount == 0:
            raise NoResultFound(f"No transaction with id {transaction_id}")

    async def find_all_ordered_by_created_at_desc(self) -> list[Transaction]:
        result = await self.db.execute(
            select(Transaction).order_by(Transaction.created_at.desc(), Transaction.id)
        )
        return list(result.scalars().all())

    async def sum_of_amounts(self) -> Decimal:
        result = await self.db.execute(select(func.coalesce(func.sum(Transaction.amount), 0)))
        total = result.scalar_one()
        return total if isinstance(total, Decimal) else Decimal(str(total or 0))
