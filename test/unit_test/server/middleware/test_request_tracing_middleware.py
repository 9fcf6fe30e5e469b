"""
Unit tests for the request tracing middleware.

This test suite covers:
- Request timing and metric reporting
- The X-Process-Time header
- Slow request warnings
- Failures raised by downstream handlers
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from cafeteria_api.server.middleware import RequestTracingMiddleware

MODULE = "cafeteria_api.server.middleware.request_tracing_middleware"


def _request(method: str = "GET", path: str = "/api/v1/products"):
    request = AsyncMock(spec=Request)
    request.method = method
    request.url.path = path
    request.state = MagicMock()
    return request


def _responder(status_code: int = 200):
    async def call_next(request):
        return Response(content="ok", status_code=status_code)

    return call_next


class TestRequestTracingMiddleware:
    @pytest.mark.asyncio
    async def test_reports_request(self):
        middleware = RequestTracingMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request") as mock_log:
            response = await middleware.dispatch(_request("POST", "/api/v1/orders"), _responder(201))

        assert response.status_code == 201
        mock_log.assert_called_once()
        kwargs = mock_log.call_args[1]
        assert kwargs["method"] == "POST"
        assert kwargs["path"] == "/api/v1/orders"
        assert kwargs["status_code"] == 201
        assert kwargs["duration_ms"] >= 0

    @pytest.mark.asyncio
    async def test_adds_process_time_header(self):
        middleware = RequestTracingMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request"):
            response = await middleware.dispatch(_request(), _responder())

        assert float(response.headers["X-Process-Time"]) >= 0

    @pytest.mark.asyncio
    async def test_stores_start_time(self):
        middleware = RequestTracingMiddleware(app=AsyncMock())
        request = _request()

        with patch(f"{MODULE}.log_api_request"), patch(f"{MODULE}.time.time", side_effect=[42.0, 42.1]):
            await middleware.dispatch(request, _responder())

        assert request.state.start_time == 42.0

    @pytest.mark.asyncio
    async def test_warns_about_slow_requests(self):
        middleware = RequestTracingMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request"), patch(f"{MODULE}.logger") as mock_logger:
            with patch(f"{MODULE}.time.time", side_effect=[0, 1.5]):
                response = await middleware.dispatch(_request(path="/api/v1/tables/with-orders"), _responder())

        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]
        assert response.headers["X-Process-Time"] == "1500.00"

    @pytest.mark.asyncio
    async def test_fast_requests_do_not_warn(self):
        middleware = RequestTracingMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request"), patch(f"{MODULE}.logger") as mock_logger:
            with patch(f"{MODULE}.time.time", side_effect=[0, 0.2]):
                await middleware.dispatch(_request(), _responder())

        mock_logger.warning.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_is_logged_and_reraised(self):
        middleware = RequestTracingMiddleware(app=AsyncMock())

        async def failing(request):
            raise ValueError("database went away")

        with patch(f"{MODULE}.log_api_request") as mock_log, patch(f"{MODULE}.logger") as mock_logger:
            with pytest.raises(ValueError):
                await middleware.dispatch(_request(), failing)

        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args[1]["extra"]["error"] == "database went away"
        assert mock_log.call_args[1]["status_code"] == 500
