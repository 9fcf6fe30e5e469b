"""
Handlers that render expected failures as the ``ErrorResponse`` envelope.

Every handled error produces ``{"detail": str, "code": str | None, "details": any}``.
"""

from typing import Any, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from cafeteria_api.core.errors import AuthenticationError, CafeteriaError
from cafeteria_api.core.logging_config import get_logger

logger = get_logger(__name__)

HTTP_STATUS_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


def error_response(
    status_code: int, detail: str, code: Optional[str] = None, details: Any = None, headers: Optional[dict] = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "code": code, "details": jsonable_encoder(details)},
        headers=headers,
    )


async def cafeteria_error_handler(request: Request, exc: CafeteriaError) -> JSONResponse:
    """Render a domain error raised by a service or dependency."""
    logger.info(
        f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}",
        extra={"code": exc.code, "status_code": exc.status_code},
    )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return error_response(exc.status_code, exc.message, exc.code, exc.details, headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render ``HTTPException`` raised by routers (mostly plain not-found cases)."""
    return error_response(
        exc.status_code,
        str(exc.detail),
        HTTP_STATUS_CODES.get(exc.status_code),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request schema failures as 422 with the pydantic error list."""
    return error_response(422, "Validation error", "VALIDATION_ERROR", exc.errors())


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(f"Rate limit exceeded for {request.method} {request.url.path}: {exc.detail}")
    return error_response(429, f"Rate limit exceeded: {exc.detail}", "RATE_LIMIT_EXCEEDED")
