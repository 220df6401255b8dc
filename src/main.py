"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.am_ai.api.router import router as ai_router
from src.am_auction.api.router import router as auction_router
from src.am_bidding.api.router import router as bidding_router
from src.am_bidding.api.router import watchlist_router
from src.am_common.database import engine
from src.am_common.errors import AppError, InternalError
from src.am_common.redis_client import close_redis, ping_redis
from src.am_common.response import error_response
from src.am_gateway.middleware.request_log import RequestLogMiddleware
from src.am_notification.api.router import router as notification_router
from src.am_payment.api.router import router as payment_router
from src.am_review.api.router import router as review_router
from src.am_settlement.api.router import router as settlement_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis connections. Shutdown: dispose."""
    # Startup
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await ping_redis()
    logger.info("%s started", settings.APP_NAME)
    yield
    # Shutdown
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("%s %s failed: [%d] %s", request.method, request.url.path, exc.code, exc.message)
    resp = error_response(exc.code, exc.message, request)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    err = InternalError()
    resp = error_response(err.code, err.message, request)
    return JSONResponse(status_code=err.http_status, content=resp.model_dump())


app.include_router(settlement_router, prefix="/api/v1")
app.include_router(auction_router, prefix="/api/v1")
app.include_router(bidding_router, prefix="/api/v1")
app.include_router(watchlist_router, prefix="/api/v1")
app.include_router(notification_router, prefix="/api/v1")
app.include_router(payment_router, prefix="/api/v1")
app.include_router(review_router, prefix="/api/v1")
app.include_router(ai_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
