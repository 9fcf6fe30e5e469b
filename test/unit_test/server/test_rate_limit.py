"""Unit tests for request rate limiting."""

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from cafeteria_api.server.core.config import settings
from cafeteria_api.server.exception_handlers.domain_handler import rate_limit_exceeded_handler
from cafeteria_api.server.rate_limit import AUTH_LIMIT, REGISTER_LIMIT, limiter

pytestmark = pytest.mark.asyncio


def test_limiter_follows_settings():
    assert limiter.enabled is settings.rate_limit.enabled
    assert AUTH_LIMIT == settings.rate_limit.auth
    assert REGISTER_LIMIT == settings.rate_limit.register


async def test_exceeding_limit_returns_envelope():
    test_limiter = Limiter(key_func=get_remote_address)
    app = FastAPI()
    app.state.limiter = test_limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    @app.post("/login")
    @test_limiter.limit("2/minute")
    async def login(request: Request):
        return {"ok": True}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        statuses = [(await client.post("/login")).status_code for _ in range(2)]
        blocked = await client.post("/login")

    assert statuses == [200, 200]
    assert blocked.status_code == 429
    assert blocked.json()["code"] == "RATE_LIMIT_EXCEEDED"
