import uuid
from contextlib import asynccontextmanager
from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy.exc import NoResultFound

from ledger_api.database import build_engine, build_session_factory, create_schema
from ledger_api.models import Transaction
from ledger_api.repositories import TransactionRepository
from ledger_api.services.transaction import TransactionService, ValidationError

pytestmark = pytest.mark.anyio


@asynccontextmanager
async def sqlite_session(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    try:
        await create_schema(engine)
        async with build_session_factory(engine)() as session:
            yield session
    finally:
        await engine.dispose()


def _transaction(amount, description, created_at):
    return Transaction(amount=Decimal(amount), description=description, created_at=created_at)


async def test_save_inserts_with_generated_id(tmp_path, start_time):
    async with sqlite_session(tmp_path) as session:
        repo = TransactionRepository(session)

        stored = await repo.save(_transaction("20.50", "coffee", start_time))

        assert isinstance(stored.id, uuid.UUID)
        assert await repo.exists_by_id(stored.id)
        found = await repo.find_by_id(stored.id)
        assert found.description == "coffee"
        assert found.amount == Decimal("20.50")


async def test_save_overwrites_existing_row(tmp_path, start_time):
    async with sqlite_session(tmp_path) as session:
        repo = TransactionRepository(session)
        stored = await repo.save(_transaction("20.50", "coffee", start_time))
        await session.commit()

        replacement = _transaction("-3", "refund", start_time + timedelta(minutes=5))
        replacement.id = stored.id
        updated = await repo.save(replacement)
        await session.commit()

        assert updated.id == stored.id
        rows = await repo.find_all_ordered_by_created_at_desc()
        assert len(rows) == 1
        assert rows[0].description == "refund"
        assert rows[0].amount == Decimal("-3")


async def test_find_by_id_unknown_returns_none(tmp_path):
    async with sqlite_session(tmp_path) as session:
        repo = TransactionRepository(session)

        assert await repo.find_by_id(uuid.uuid4()) is None
        assert not await repo.exists_by_id(uuid.uuid4())


async def test_delete_by_id(tmp_path, start_time):
    async with sqlite_session(tmp_path) as session:
        repo = TransactionRepository(session)
        stored = await repo.save(_transaction("1", "gum", start_time))

        await repo.delete_by_id(stored.id)

        assert not await repo.exists_by_id(stored.id)
        with pytest.raises(NoResultFound):
            await repo.delete_by_id(stored.id)


async def test_find_all_orders_newest_first(tmp_path, start_time):
    async with sqlite_session(tmp_path) as session:
        repo = TransactionRepository(session)
        await repo.save(_transaction("1", "middle", start_time + timedelta(hours=1)))
        await repo.save(_transaction("1", "oldest", start_time))
        await repo.save(_transaction("1", "newest", start_time + timedelta(hours=2)))

        rows = await repo.find_all_ordered_by_created_at_desc()

        assert [t.description for t in rows] == ["newest", "middle", "oldest"]


async def test_sum_of_amounts_is_zero_when_empty(tmp_path):
    async with sqlite_session(tmp_path) as session:
        total = await TransactionRepository(session).sum_of_amounts()

        assert total == Decimal("0")


async def test_service_balance_scenario(tmp_path, clock):
    async with sqlite_session(tmp_path) as session:
        service = TransactionService(TransactionRepository(session), clock=clock)

        await service.create(Transaction(amount=Decimal("20.50"), description="first"))
        await service.create(Transaction(amount=Decimal("30.50"), description="second"))

        assert await service.get_current_balance() == Decimal("51.00")
        assert [t.description for t in await service.find_all()] == ["second", "first"]


async def test_service_rejects_update_of_deleted_row(tmp_path, clock):
    async with sqlite_session(tmp_path) as session:
        service = TransactionService(TransactionRepository(session), clock=clock)
        created = await service.create(Transaction(amount=Decimal("5"), description="temp"))
        await service.delete_by_id(created.id)

        stale = Transaction(amount=Decimal("6"), description="temp")
        stale.id = created.id
        with pytest.raises(ValidationError, match="does not exist"):
            await service.update(stale)
