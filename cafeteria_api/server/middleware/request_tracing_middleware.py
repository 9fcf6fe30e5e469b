"""
Per-request timing for the cafeteria API.

Each request is reported once through ``log_api_request`` with its status and
duration. Successful responses carry the duration in ``X-Process-Time``
(milliseconds, two decimals). Handlers that raise are reported as 500 and the
exception propagates to the error handlers unchanged.
"""

import time
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from cafeteria_api.core.logging_config import get_logger
from cafeteria_api.core.monitoring import log_api_request

logger = get_logger(__name__)

SLOW_REQUEST_MS = 1000


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Times requests and flags slow or failing ones."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.time()
        request.state.start_time = started

        try:
            response = await call_next(request)
        except Exception as exc:
            self._report(request, 500, started, error=exc)
            raise

        duration_ms = self._report(request, response.status_code, started)
        response.headers["X-Process-Time"] = f"{duration_ms:.2f}"
        return response

    @staticmethod
    def _report(request: Request, status_code: int, started: float, error: Optional[Exception] = None) -> float:
        duration_ms = (time.time() - started) * 1000
        method, path = request.method, request.url.path
        log_api_request(method=method, path=path, status_code=status_code, duration_ms=duration_ms)

        context = {"method": method, "path": path, "duration_ms": duration_ms, "status_code": status_code}
        if error is not None:
            logger.error(
                f"API request failed: {method} {path} ({type(error).__name__})",
                exc_info=error,
                extra={**context, "error": str(error)},
            )
        elif duration_ms > SLOW_REQUEST_MS:
            logger.warning(f"Slow API request: {method} {path} took {duration_ms:.2f}ms", extra=context)
        return duration_ms
