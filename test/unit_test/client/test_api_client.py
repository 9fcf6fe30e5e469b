"""Unit tests for CafeteriaApiClient using httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Callable, Dict, List

import httpx
import pytest

from cafeteria_api.client import CafeteriaApiClient
from cafeteria_api.client.errors import CafeteriaApiError, ResourceNotFoundError

pytestmark = pytest.mark.asyncio

BASE = "http://mock-cafeteria"


class Recorder:
    """MockTransport handler that records requests and answers from a routing function."""

    def __init__(self, route: Callable[[httpx.Request], httpx.Response]):
        self.route = route
        self.requests: List[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        await asyncio.sleep(0)
        return self.route(request)

    def calls(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path == path)


def _json(status: int, body: Any) -> httpx.Response:
    return httpx.Response(status, json=body)


def _default_route(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/api/v1/users/login":
        return _json(200, {"access_token": "tok-" + json.loads(request.content)["email"], "token_type": "bearer"})
    if path.startswith("/api/v1/products/404"):
        return _json(404, {"detail": "Product 404 not found", "code": "NOT_FOUND", "details": None})
    if path == "/api/v1/carts/items" and request.method == "POST":
        return _json(400, {"detail": "Insufficient stock", "code": "INSUFFICIENT_STOCK", "details": {"available": 1}})
    if path == "/api/v1/users/addresses/1" and request.method == "DELETE":
        return httpx.Response(204)
    if path == "/api/v1/health":
        return httpx.Response(503, text="maintenance")
    return _json(200, {"path": path, "query": dict(request.url.params), "auth": request.headers.get("authorization")})


@pytest.fixture
def recorder() -> Recorder:
    return Recorder(_default_route)


@pytest.fixture
async def api(recorder: Recorder):
    http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    client = CafeteriaApiClient(BASE, client=http)
    yield client
    await http.aclose()


class TestCaching:
    async def test_get_is_cached(self, api: CafeteriaApiClient, recorder: Recorder):
        first = await api.list_categories()
        second = await api.list_categories()

        assert first == second
        assert recorder.calls("GET", "/api/v1/categories") == 1

    async def test_cache_key_ignores_param_order_and_none(self, api: CafeteriaApiClient, recorder: Recorder):
        await api.list_products(search="latte", page=1)
        await api.list_products(page=1, search="latte", category_id=None)

        assert recorder.calls("GET", "/api/v1/products") == 1
        assert dict(recorder.requests[0].url.params) == {"page": "1", "search": "latte"}

    async def test_concurrent_gets_share_one_request(self, api: CafeteriaApiClient, recorder: Recorder):
        results = await asyncio.gather(api.get_cart(), api.get_cart(), api.get_cart())

        assert results[0] == results[1] == results[2]
        assert recorder.calls("GET", "/api/v1/carts") == 1

    async def test_mutation_invalidates_related_entries(self, api: CafeteriaApiClient, recorder: Recorder):
        await api.get_cart()
        await api.list_categories()

        await api.clear_cart()
        await api.get_cart()
        await api.list_categories()

        assert recorder.calls("GET", "/api/v1/carts") == 2
        assert recorder.calls("GET", "/api/v1/categories") == 1

    async def test_checkout_invalidates_orders_carts_and_products(self, api: CafeteriaApiClient, recorder: Recorder):
        await api.list_orders()
        await api.get_cart()
        await api.get_product(1)

        await api.checkout(1, notes="sin azucar")

        assert api.cache.stats()["size"] == 0
        body = json.loads(recorder.requests[-1].content)
        assert body == {"payment_method_id": 1, "notes": "sin azucar"}

    async def test_tables_with_orders_is_never_cached(self, api: CafeteriaApiClient, recorder: Recorder):
        await api.list_tables_with_orders()
        await api.list_tables_with_orders()

        assert recorder.calls("GET", "/api/v1/tables/with-orders") == 2


class TestAuthentication:
    async def test_login_sets_bearer_header(self, api: CafeteriaApiClient):
        await api.login("ana@cafeteria.cl", "secret123")

        profile = await api.get_profile()

        assert api.token == "tok-ana@cafeteria.cl"
        assert profile["auth"] == "Bearer tok-ana@cafeteria.cl"

    async def test_switching_token_clears_cache(self, api: CafeteriaApiClient, recorder: Recorder):
        await api.login("ana@cafeteria.cl", "secret123")
        await api.get_cart()

        await api.login("luis@cafeteria.cl", "secret123")
        cart = await api.get_cart()

        assert cart["auth"] == "Bearer tok-luis@cafeteria.cl"
        assert recorder.calls("GET", "/api/v1/carts") == 2

    async def test_same_token_keeps_cache(self, api: CafeteriaApiClient):
        api.set_token("abc")
        await api.list_categories()

        api.set_token("abc")

        assert api.cache.stats()["size"] == 1

    async def test_logout_drops_header(self, api: CafeteriaApiClient, recorder: Recorder):
        api.set_token("abc")
        api.logout()

        await api.list_categories()

        assert "authorization" not in recorder.requests[-1].headers


class GatedRecorder(Recorder):
    """Recorder that holds every GET until ``release()`` so reads can overlap other calls."""

    def __init__(self, route: Callable[[httpx.Request], httpx.Response]):
        super().__init__(route)
        self.gate = asyncio.Event()
        self.served = 0

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET":
            await self.gate.wait()
        self.served += 1
        response = self.route(request)
        if request.method == "GET":
            return _json(response.status_code, {**response.json(), "serial": self.served})
        return response

    def release(self) -> None:
        self.gate.set()

    async def wait_for_gets(self, count: int) -> None:
        while sum(1 for r in self.requests if r.method == "GET") < count:
            await asyncio.sleep(0)


@pytest.fixture
async def gated_api():
    recorder = GatedRecorder(_default_route)
    http = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
    client = CafeteriaApiClient(BASE, client=http)
    yield client, recorder
    await http.aclose()


class TestOverlappingRequests:
    async def test_token_switch_during_read_does_not_share_or_cache_old_data(self, gated_api):
        api, recorder = gated_api
        api.set_token("tok-A")
        first = asyncio.ensure_future(api.get_cart())
        await recorder.wait_for_gets(1)

        api.set_token("tok-B")
        second = asyncio.ensure_future(api.get_cart())
        await recorder.wait_for_gets(2)
        recorder.release()
        cart_a, cart_b = await asyncio.gather(first, second)

        assert cart_a["auth"] == "Bearer tok-A"
        assert cart_b["auth"] == "Bearer tok-B"
        assert recorder.calls("GET", "/api/v1/carts") == 2
        cached = await api.get_cart()
        assert cached["auth"] == "Bearer tok-B"
        assert recorder.calls("GET", "/api/v1/carts") == 2

    async def test_read_started_before_switch_is_not_cached(self, gated_api):
        api, recorder = gated_api
        api.set_token("tok-A")
        pending = asyncio.ensure_future(api.get_cart())
        await recorder.wait_for_gets(1)

        api.set_token("tok-B")
        recorder.release()
        await pending

        assert api.cache.stats()["size"] == 0
        cart = await api.get_cart()
        assert cart["auth"] == "Bearer tok-B"

    async def test_mutation_during_read_forces_refetch(self, gated_api):
        api, recorder = gated_api
        stale_read = asyncio.ensure_future(api.get_cart())
        await recorder.wait_for_gets(1)

        await api.clear_cart()
        recorder.release()
        stale = await stale_read
        fresh = await api.get_cart()

        assert recorder.calls("GET", "/api/v1/carts") == 2
        assert fresh["serial"] > stale["serial"]
        assert (await api.get_cart()) == fresh

    async def test_read_after_mutation_does_not_join_stale_request(self, gated_api):
        api, recorder = gated_api
        stale_read = asyncio.ensure_future(api.get_cart())
        await recorder.wait_for_gets(1)

        await api.clear_cart()
        fresh_read = asyncio.ensure_future(api.get_cart())
        await recorder.wait_for_gets(2)
        recorder.release()
        stale, fresh = await asyncio.gather(stale_read, fresh_read)

        assert recorder.calls("GET", "/api/v1/carts") == 2
        assert fresh["serial"] != stale["serial"]


class TestErrors:
    async def test_not_found(self, api: CafeteriaApiClient):
        with pytest.raises(ResourceNotFoundError) as exc_info:
            await api.get_product(404)

        assert exc_info.value.status_code == 404
        assert exc_info.value.code == "NOT_FOUND"
        assert exc_info.value.message == "Product 404 not found"

    async def test_business_error_envelope(self, api: CafeteriaApiClient):
        with pytest.raises(CafeteriaApiError) as exc_info:
            await api.add_to_cart(1, 5)

        error = exc_info.value
        assert not isinstance(error, ResourceNotFoundError)
        assert error.status_code == 400
        assert error.code == "INSUFFICIENT_STOCK"
        assert error.details == {"available": 1}

    async def test_non_json_error_body(self, api: CafeteriaApiClient):
        with pytest.raises(CafeteriaApiError) as exc_info:
            await api.health()

        assert exc_info.value.status_code == 503
        assert exc_info.value.message == "maintenance"
        assert exc_info.value.code is None

    async def test_failed_get_is_not_cached(self, api: CafeteriaApiClient, recorder: Recorder):
        for _ in range(2):
            with pytest.raises(ResourceNotFoundError):
                await api.get_product(404)

        assert recorder.calls("GET", "/api/v1/products/404") == 2

    async def test_no_content_returns_none(self, api: CafeteriaApiClient):
        assert await api.delete_address(1) is None


async def test_custom_prefix_and_owned_client_closed():
    seen: Dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        return _json(200, [])

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    async with CafeteriaApiClient(BASE + "/", api_prefix="api/v2/", client=http) as api:
        await api.list_order_statuses()

    assert seen["path"] == "/api/v2/order-statuses"
    assert not http.is_closed
    await http.aclose()
