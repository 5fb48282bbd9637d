"""
Pond Ledger - FastAPI Application.

This is the entry point for the application.
All routers and error handlers are registered here.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from pond_ledger.config import get_settings
from pond_ledger.db_init import init_db
from pond_ledger.exceptions import PondLedgerError
from pond_ledger.api.health import router as health_router
from pond_ledger.api.customers import router as customers_router
from pond_ledger.api.ponds import router as ponds_router
from pond_ledger.api.transactions import router as transactions_router
from pond_ledger.api.debts import router as debts_router
from pond_ledger.api.expenses import router as expenses_router
from pond_ledger.api.stock import router as stock_router
from pond_ledger.api.reports import router as reports_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.INIT_DB_ON_STARTUP:
        init_db()
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Sales, receivables and operations ledger for a fish farm",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error handlers ---
# Every error body has the shape {"error": message}.

@app.exception_handler(PondLedgerError)
async def pond_ledger_error_handler(request: Request, exc: PondLedgerError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
):
    messages = []
    for error in exc.errors():
        field = ".".join(
            str(part) for part in error.get("loc", ()) if part != "body"
        )
        message = error.get("msg")
        messages.append(f"{field}: {message}" if field else message)
    return JSONResponse(
        status_code=400,
        content={"error": "; ".join(messages) or "Invalid request"},
    )


# Server-side failures are logged with their traceback; the client only
# ever sees a generic message.

@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(
        "Database error on %s %s", request.method, request.url.path,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "Server error"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled error on %s %s", request.method, request.url.path,
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"error": "Server error"})


# Register routers
app.include_router(health_router)
app.include_router(customers_router)
app.include_router(ponds_router)
app.include_router(transactions_router)
app.include_router(debts_router)
app.include_router(expenses_router)
app.include_router(stock_router)
app.include_router(reports_router)


if __name__ == "__main__":
    uvicorn.run(
        "pond_ledger.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
