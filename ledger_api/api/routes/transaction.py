from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Path, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ledger_api.database import get_db
from ledger_api.repositories import TransactionRepository
from ledger_api.schemas import BalanceResponse, ErrorResponse, TransactionRequest, TransactionResponse
from ledger_api.services.transaction import TransactionService, utcnow

router = APIRouter()

BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Bad Request"}}


class InvalidIdentifierError(ValueError):
    pass


def parse_id(raw: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError:
        raise InvalidIdentifierError(f"Invalid UUID string: {raw}") from None


def get_transaction_service(db: AsyncSession = Depends(get_db)) -> TransactionService:
    return TransactionService(TransactionRepository(db))


@router.get(
    "",
    response_model=list[TransactionResponse],
    summary="Find all the transactions",
    description="All transactions, most recent first.",
)
async def find_all(service: TransactionService = Depends(get_transaction_service)):
    return await service.find_all()


@router.get(
    "/current-balance",
    response_model=BalanceResponse,
    summary="Get the current balance",
    description="Sum of the amounts of every stored transaction, with the time it was computed.",
)
async def get_current_balance(service: TransactionService = Depends(get_transaction_service)):
    balance = await service.get_current_balance()
    return BalanceResponse(date_time=utcnow(), balance=balance)


@router.get(
    "/{id}",
    response_model=TransactionResponse,
    summary="Find a transaction by id",
    responses={404: {"description": "Not Found"}, **BAD_REQUEST},
)
async def find_by_id(
    id: str = Path(..., description="Transaction UUID"),
    service: TransactionService = Depends(get_transaction_service),
):
    transaction = await service.find_by_id(parse_id(id))
    if transaction is None:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.post(
    "",
    response_model=TransactionResponse,
    summary="Create a transaction",
    description="The id must be absent; it is generated, and createdAt is set by the server.",
    responses=BAD_REQUEST,
)
async def create(
    body: TransactionRequest,
    service: TransactionService = Depends(get_transaction_service),
):
    return await service.create(body.to_entity())


@router.put(
    "",
    response_model=TransactionResponse,
    summary="Update a transaction",
    description="Overwrites amount and description of an existing transaction and refreshes createdAt.",
    responses=BAD_REQUEST,
)
async def update(
    body: TransactionRequest,
    service: TransactionService = Depends(get_transaction_service),
):
    return await service.update(body.to_entity())


@router.delete(
    "/{id}",
    summary="Delete a transaction",
    responses=BAD_REQUEST,
)
async def delete(
    id: str = Path(..., description="Transaction UUID"),
    service: TransactionService = Depends(get_transaction_service),
):
    await service.delete_by_id(parse_id(id))
    return Response(status_code=200)
