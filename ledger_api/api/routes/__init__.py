from fastapi import APIRouter
from ledger_api.api.routes import transaction

api_router = APIRouter()
api_router.include_router(transaction.router, prefix="/transaction", tags=["Transaction"])
