import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from ledger_api.models import Transaction
from ledger_api.repositories import TransactionStore


# --- Doubles ---

class StepClock:
    """Returns start, start + step, start + 2 * step, ... on successive calls."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + self.step
        return now


class InMemoryTransactionStore(TransactionStore):
    def __init__(self):
        self.rows: dict[uuid.UUID, Transaction] = {}

    async def save(self, transaction: Transaction) -> Transaction:
        if transaction.id is None:
            transaction.id = uuid.uuid4()
        self.rows[transaction.id] = transaction
        return transaction

    async def find_by_id(self, transaction_id):
        return self.rows.get(transaction_id)

    async def exists_by_id(self, transaction_id) -> bool:
        return transaction_id in self.rows

    async def delete_by_id(self, transaction_id) -> None:
        del self.rows[transaction_id]

    async def find_all_ordered_by_created_at_desc(self):
        return sorted(self.rows.values(), key=lambda t: t.created_at, reverse=True)

    async def sum_of_amounts(self) -> Decimal:
        return sum((t.amount for t in self.rows.values()), Decimal("0"))


# --- Fixtures ---

@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def start_time():
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(start_time):
    return StepClock(start_time)


@pytest.fixture
def store():
    return InMemoryTransactionStore()
