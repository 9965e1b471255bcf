# marketplace/api/errors.py
"""
Maps exceptions to JSON error responses.

Domain errors are translated by kind. Database and Redis failures become
503 and anything else 500; in both cases the raw message is only logged.
"""
import traceback
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from marketplace.domain.errors import ErrorKind, MarketplaceError
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.CONFLICT: 409,
    ErrorKind.VALIDATION: 400,
    ErrorKind.INFRASTRUCTURE: 503,
}


def create_error_response(error: str, code: str, status_code: int, detail: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "code": code,
            "detail": detail,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


def setup_exception_handlers(app: FastAPI):
    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(request: Request, exc: MarketplaceError):
        status_code = STATUS_BY_KIND[exc.kind]
        logger.info(f"{request.method} {request.url.path} -> {status_code} {exc.kind.value}: {exc.message}")
        return create_error_response(exc.message, exc.kind.value, status_code, exc.detail)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
        return create_error_response(
            "Service unavailable", ErrorKind.INFRASTRUCTURE.value, 503, "Database error"
        )

    @app.exception_handler(RedisError)
    async def session_store_error_handler(request: Request, exc: RedisError):
        logger.error(f"Session store error on {request.method} {request.url.path}: {exc}")
        return create_error_response(
            "Service unavailable", ErrorKind.INFRASTRUCTURE.value, 503, "Session store error"
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: "
            f"{type(exc).__name__}: {exc}\n{''.join(traceback.format_exception(exc))}"
        )
        return create_error_response(
            "Internal Server Error", "INTERNAL_ERROR", 500, "An unexpected error occurred"
        )
