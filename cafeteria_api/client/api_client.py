"""Async HTTP client for the Cafeteria API

Overview
--------
``CafeteriaApiClient`` wraps ``httpx.AsyncClient`` and exposes the storefront
and point-of-sale endpoints that front-ends call most: authentication, the
catalog, reviews, the cart, orders and dining tables.

Caching
-------
GET responses are stored in a :class:`~cafeteria_api.core.cache.ResponseCache`
keyed by path and sorted query parameters, with a TTL chosen per resource
family from ``CACHE_TTL``. Concurrent identical GETs share a single in-flight
request. Every mutation drops the cache entries it can make stale, e.g. cart
mutations invalidate ``/carts`` and checkout invalidates ``/orders`` and
``/carts``. A read that overlaps a mutation or a token switch returns its data
but does not cache it.

Authentication
--------------
``login``, ``login_seller`` and ``register`` store the returned bearer token on
the client; subsequent requests send it in the ``Authorization`` header.
Switching tokens clears the cache so one principal never reads another's
cached data.

Errors
------
Non-2xx responses raise :class:`CafeteriaApiError` built from the server's
``{"detail", "code", "details"}`` envelope. A 404 raises
:class:`ResourceNotFoundError`.

Usage
-----
>>> async with CafeteriaApiClient("http://localhost:8000") as api:
...     await api.login("ana@cafeteria.cl", "secret123")
...     products = await api.list_products(search="latte")
...     await api.add_to_cart(products["items"][0]["id"], 2)
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from cafeteria_api.core.cache import CACHE_TTL, ResponseCache

from .errors import CafeteriaApiError, ResourceNotFoundError

DEFAULT_API_PREFIX = "/api/v1"


class CafeteriaApiClient:
    """Caching async client for the Cafeteria REST API.

    Args:
        base_url: Server origin, e.g. ``http://localhost:8000``.
        api_prefix: Versioned path prefix prepended to every endpoint.
        token: Optional bearer token to start with.
        timeout: Default timeout of the internal ``httpx.AsyncClient``.
        client: Optional preconfigured ``httpx.AsyncClient`` (tests inject one
            backed by ``httpx.MockTransport``).
        cache: Optional cache instance; a fresh ``ResponseCache`` by default.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        api_prefix: str = DEFAULT_API_PREFIX,
        token: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
        cache: Optional[ResponseCache] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_prefix = "/" + api_prefix.strip("/") if api_prefix.strip("/") else ""
        self.token = token
        self.cache = cache or ResponseCache()
        self._http = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._owns_http = client is None
        self._inflight: Dict[Tuple[int, str], asyncio.Task] = {}
        # Bumped on token switches and on every invalidation; a GET only
        # stores its result when neither moved while it was running.
        self._generation = 0
        self._cache_version = 0
        self._logger = logging.getLogger(__name__)

    async def __aenter__(self) -> "CafeteriaApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # ----------------------
    # Plumbing
    # ----------------------

    def set_token(self, token: Optional[str]) -> None:
        """Replace the bearer token and drop everything cached or in flight for the previous one."""
        if token != self.token:
            self.cache.clear()
            self._inflight.clear()
            self._generation += 1
        self.token = token

    def _url(self, path: str) -> str:
        return f"{self.base_url}{self.api_prefix}{path}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            detail = body.get("detail")
            message = detail if isinstance(detail, str) else str(detail or response.reason_phrase)
            code = body.get("code")
            details = body.get("details")
        else:
            message = response.text or response.reason_phrase
            code = None
            details = None
        error_cls = ResourceNotFoundError if response.status_code == 404 else CafeteriaApiError
        raise error_cls(message, status_code=response.status_code, code=code, details=details)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        query = {k: v for k, v in (params or {}).items() if v is not None}
        self._logger.debug("%s %s params=%s", method, path, query)
        response = await self._http.request(
            method, self._url(path), params=query or None, json=json, headers=self._headers()
        )
        self._raise_for_status(response)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def _get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        ttl: Optional[float] = None,
        use_cache: bool = True,
    ) -> Any:
        key = ResponseCache.make_key(path, params)
        if use_cache:
            cached = self.cache.get(key)
            if cached is not None:
                self._logger.debug("cache hit: %s", key)
                return cached

        generation, version = self._generation, self._cache_version
        inflight_key = (generation, key)
        task = self._inflight.get(inflight_key)
        if task is None:
            task = asyncio.ensure_future(self._request("GET", path, params=params))
            self._inflight[inflight_key] = task
            task.add_done_callback(lambda t, k=inflight_key: self._forget_inflight(k, t))
        else:
            self._logger.debug("joining in-flight request: %s", key)

        data = await asyncio.shield(task)
        if use_cache and generation == self._generation and version == self._cache_version:
            self.cache.set(key, data, ttl)
        return data

    def _forget_inflight(self, key: Tuple[int, str], task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _mutate(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Any] = None,
        params: Optional[Mapping[str, Any]] = None,
        invalidate: tuple[str, ...] = (),
    ) -> Any:
        data = await self._request(method, path, params=params, json=json)
        if invalidate:
            # Reads started before this write may still land; keep them out of the cache.
            self._cache_version += 1
            stale = [k for k in self._inflight if any(re.search(p, k[1]) for p in invalidate)]
            for k in stale:
                del self._inflight[k]
        for pattern in invalidate:
            removed = self.cache.invalidate_pattern(pattern)
            if removed:
                self._logger.debug("invalidated %d cache entries matching %s", removed, pattern)
        return data

    # ----------------------
    # Health
    # ----------------------

    async def health(self) -> Dict[str, Any]:
        return await self._request("GET", "/health")

    # ----------------------
    # Authentication and profile
    # ----------------------

    async def register(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a customer account and adopt its token."""
        payload = await self._request("POST", "/users/register", json=data)
        self.set_token(payload["access_token"])
        return payload

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        payload = await self._request("POST", "/users/login", json={"email": email, "password": password})
        self.set_token(payload["access_token"])
        return payload

    async def login_seller(self, email: str, password: str) -> Dict[str, Any]:
        payload = await self._request("POST", "/sellers/login", json={"email": email, "password": password})
        self.set_token(payload["access_token"])
        return payload

    def logout(self) -> None:
        self.set_token(None)

    async def verify(self) -> Dict[str, Any]:
        return await self._request("GET", "/users/verify")

    async def get_profile(self) -> Dict[str, Any]:
        return await self._get("/users/profile", ttl=CACHE_TTL["user_data"])

    async def update_profile(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._mutate("PUT", "/users/profile", json=data, invalidate=("^/users",))

    async def change_password(self, current_password: str, new_password: str) -> Dict[str, Any]:
        return await self._mutate(
            "PUT",
            "/users/change-password",
            json={"current_password": current_password, "new_password": new_password},
        )

    async def list_addresses(self) -> Any:
        return await self._get("/users/addresses", ttl=CACHE_TTL["user_data"])

    async def create_address(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._mutate("POST", "/users/addresses", json=data, invalidate=("^/users/addresses",))

    async def update_address(self, address_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._mutate(
            "PUT", f"/users/addresses/{address_id}", json=data, invalidate=("^/users/addresses",)
        )

    async def delete_address(self, address_id: int) -> Any:
        return await self._mutate("DELETE", f"/users/addresses/{address_id}", invalidate=("^/users/addresses",))

    async def set_primary_address(self, address_id: int) -> Dict[str, Any]:
        return await self._mutate(
            "PUT", f"/users/addresses/{address_id}/primary", invalidate=("^/users/addresses",)
        )

    # ----------------------
    # Catalog
    # ----------------------

    async def list_categories(self) -> Any:
        return await self._get("/categories", ttl=CACHE_TTL["categories"])

    async def get_category(self, category_id: int) -> Dict[str, Any]:
        return await self._get(f"/categories/{category_id}", ttl=CACHE_TTL["categories"])

    async def list_products(
        self,
        *,
        category_id: Optional[int] = None,
        seller_id: Optional[int] = None,
        is_available: Optional[bool] = None,
        search: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = {
            "category_id": category_id,
            "seller_id": seller_id,
            "is_available": is_available,
            "search": search,
            "page": page,
            "page_size": page_size,
        }
        return await self._get("/products", params, ttl=CACHE_TTL["products"])

    async def get_product(self, product_id: int) -> Dict[str, Any]:
        return await self._get(f"/products/{product_id}", ttl=CACHE_TTL["products"])

    async def create_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._mutate("POST", "/products", json=data, invalidate=("^/products",))

    async def update_product(self, product_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._mutate("PUT", f"/products/{product_id}", json=data, invalidate=("^/products",))

    async def delete_product(self, product_id: int) -> Any:
        return await self._mutate("DELETE", f"/products/{product_id}", invalidate=("^/products",))

    # ----------------------
    # Reviews
    # ----------------------

    async def list_reviews(self, product_id: int) -> Any:
        return await self._get(f"/products/{product_id}/reviews", ttl=CACHE_TTL["reviews"])

    async def review_summary(self, product_id: int) -> Dict[str, Any]:
        return await self._get(f"/products/{product_id}/reviews/summary", ttl=CACHE_TTL["reviews"])

    async def create_review(self, product_id: int, rating: int, comment: Optional[str] = None) -> Dict[str, Any]:
        return await self._mutate(
            "POST",
            f"/products/{product_id}/reviews",
            json={"rating": rating, "comment": comment},
            invalidate=(f"^/products/{product_id}/reviews",),
        )

    async def update_review(self, review_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._mutate("PUT", f"/reviews/{review_id}", json=data, invalidate=("/reviews",))

    async def delete_review(self, review_id: int) -> Any:
        return await self._mutate("DELETE", f"/reviews/{review_id}", invalidate=("/reviews",))

    # ----------------------
    # Cart
    # ----------------------

    async def get_cart(self) -> Dict[str, Any]:
        return await self._get("/carts", ttl=CACHE_TTL["user_data"])

    async def add_to_cart(self, product_id: int, quantity: int = 1) -> Dict[str, Any]:
        return await self._mutate(
            "POST", "/carts/items", json={"product_id": product_id, "quantity": quantity}, invalidate=("^/carts",)
        )

    async def update_cart_item(self, product_id: int, quantity: int) -> Dict[str, Any]:
        return await self._mutate(
            "PUT", "/carts/items", json={"product_id": product_id, "quantity": quantity}, invalidate=("^/carts",)
        )

    async def remove_from_cart(self, product_id: int) -> Dict[str, Any]:
        return await self._mutate("DELETE", f"/carts/items/{product_id}", invalidate=("^/carts",))

    async def clear_cart(self) -> Dict[str, Any]:
        return await self._mutate("DELETE", "/carts", invalidate=("^/carts",))

    # ----------------------
    # Orders
    # ----------------------

    async def list_orders(
        self,
        *,
        order_status_id: Optional[int] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Dict[str, Any]:
        params = {
            "order_status_id": order_status_id,
            "date_from": date_from,
            "date_to": date_to,
            "page": page,
            "page_size": page_size,
        }
        return await self._get("/orders", params, ttl=CACHE_TTL["orders"])

    async def get_order(self, order_id: int) -> Dict[str, Any]:
        return await self._get(f"/orders/{order_id}", ttl=CACHE_TTL["orders"])

    async def get_order_history(self, order_id: int) -> Any:
        return await self._get(f"/orders/{order_id}/history", ttl=CACHE_TTL["orders"])

    async def checkout(
        self,
        payment_method_id: int,
        *,
        address_id: Optional[int] = None,
        delivery_type: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Turn the current cart into an order; stock and cart change with it."""
        body: Dict[str, Any] = {"payment_method_id": payment_method_id}
        if address_id is not None:
            body["address_id"] = address_id
        if delivery_type is not None:
            body["delivery_type"] = delivery_type
        if notes is not None:
            body["notes"] = notes
        return await self._mutate("POST", "/orders", json=body, invalidate=("^/orders", "^/carts", "^/products"))

    async def create_direct_order(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._mutate(
            "POST", "/orders/direct", json=data, invalidate=("^/orders", "^/products", "^/tables")
        )

    async def update_order_status(
        self, order_id: int, order_status_id: int, comment: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self._mutate(
            "PUT",
            f"/orders/{order_id}/status",
            json={"order_status_id": order_status_id, "comment": comment},
            invalidate=("^/orders", "^/tables"),
        )

    async def cancel_order(self, order_id: int, reason: Optional[str] = None) -> Dict[str, Any]:
        return await self._mutate(
            "POST",
            f"/orders/{order_id}/cancel",
            json={"reason": reason},
            invalidate=("^/orders", "^/products", "^/tables"),
        )

    # ----------------------
    # Reference data and tables
    # ----------------------

    async def list_payment_methods(self, active_only: bool = False) -> Any:
        params = {"active_only": True} if active_only else None
        return await self._get("/payment-methods", params, ttl=CACHE_TTL["categories"])

    async def list_order_statuses(self) -> Any:
        return await self._get("/order-statuses", ttl=CACHE_TTL["categories"])

    async def list_tables(self) -> Any:
        return await self._get("/tables", ttl=CACHE_TTL["dashboard"])

    async def list_available_tables(self) -> Any:
        return await self._get("/tables/available", ttl=CACHE_TTL["dashboard"])

    async def list_tables_with_orders(self) -> Any:
        # Always fetched fresh: the server reconciles table statuses on this call.
        return await self._get("/tables/with-orders", use_cache=False)

    async def update_table_status(self, table_id: int, status: str) -> Dict[str, Any]:
        return await self._mutate(
            "PATCH", f"/tables/{table_id}/status", json={"status": status}, invalidate=("^/tables", "^/orders")
        )
