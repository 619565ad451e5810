import asyncio
import logging
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ledger_api.api.routes import api_router
from ledger_api.api.routes.transaction import InvalidIdentifierError
from ledger_api.config import settings
from ledger_api.database import create_schema, engine
from ledger_api.schemas import ErrorResponse
from ledger_api.services.transaction import ValidationError, utcnow

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


async def _init_db():
    """Retry DB connection and create tables. Runs in background so the app can bind its port."""
    for attempt in range(30):
        try:
            await create_schema(engine)
            logger.info("Database initialized successfully")
            return
        except Exception as e:
            wait = min(2**attempt, 30)
            logger.warning("DB init failed (attempt %d/30), retrying in %ds: %s", attempt + 1, wait, e)
            await asyncio.sleep(wait)
    logger.error("Database initialization failed after 30 attempts")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_task = asyncio.create_task(_init_db())
    yield
    init_task.cancel()
    await engine.dispose()


def _contact_info() -> dict[str, str] | None:
    contact = {"name": settings.contact_name, "email": settings.contact_email, "url": settings.contact_url}
    return {k: v for k, v in contact.items() if v} or None


def _bad_request(message: str) -> JSONResponse:
    body = ErrorResponse(
        date_time=utcnow(),
        http_status=HTTPStatus.BAD_REQUEST.phrase,
        message=message,
    )
    return JSONResponse(status_code=HTTPStatus.BAD_REQUEST, content=body.model_dump(mode="json", by_alias=True))


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Minimal ledger: CRUD over transactions plus the running balance.",
    contact=_contact_info(),
    license_info={"name": settings.license_name, "url": settings.license_url},
    lifespan=lifespan,
)
app.include_router(api_router, prefix="/api")


@app.exception_handler(ValidationError)
@app.exception_handler(InvalidIdentifierError)
async def handle_bad_request(request: Request, exc: ValueError):
    return _bad_request(str(exc))


@app.exception_handler(RequestValidationError)
async def handle_malformed_request(request: Request, exc: RequestValidationError):
    logger.warning("Malformed request to %s: %s", request.url.path, exc.errors())
    message = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return _bad_request(message)


@app.get("/health")
def health():
    return {"status": "ok"}
