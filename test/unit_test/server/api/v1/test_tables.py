"""Tests for dining tables and their link to point-of-sale orders."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from test.unit_test.server.support import API, CASH, DELIVERED, PENDING, Account

pytestmark = pytest.mark.asyncio

TABLES = f"{API}/tables"


async def _seat_order(client: AsyncClient, staff: Account, product_id: int, table_id: int) -> dict:
    response = await client.post(
        f"{API}/orders/direct",
        json={"items": [{"product_id": product_id, "quantity": 1}], "payment_method_id": CASH, "table_id": table_id},
        headers=staff.headers,
    )
    assert response.status_code == 201
    return response.json()


class TestTableCrud:
    async def test_create_and_list(self, client: AsyncClient, seller: Account):
        for number in ["M2", "M1"]:
            created = await client.post(TABLES, json={"number": number, "capacity": 2}, headers=seller.headers)
            assert created.status_code == 201

        listing = await client.get(TABLES)

        assert [t["number"] for t in listing.json()] == ["M1", "M2"]
        assert listing.json()[0]["status"] == "available"

    async def test_duplicate_number(self, client: AsyncClient, admin: Account, table):
        response = await client.post(TABLES, json={"number": table.number}, headers=admin.headers)

        assert response.status_code == 409
        assert response.json()["code"] == "TABLE_EXISTS"

    async def test_update(self, client: AsyncClient, admin: Account, table):
        response = await client.put(f"{TABLES}/{table.id}", json={"capacity": 6}, headers=admin.headers)

        assert response.status_code == 200
        assert response.json()["capacity"] == 6
        assert response.json()["number"] == table.number

    async def test_update_rejects_null_capacity(self, client: AsyncClient, admin: Account, table):
        response = await client.put(f"{TABLES}/{table.id}", json={"capacity": None}, headers=admin.headers)

        assert response.status_code == 422

    async def test_rename_to_existing_number(self, client: AsyncClient, admin: Account, table):
        other = (await client.post(TABLES, json={"number": "M9"}, headers=admin.headers)).json()

        response = await client.put(f"{TABLES}/{other['id']}", json={"number": table.number}, headers=admin.headers)

        assert response.status_code == 409

    async def test_delete_is_soft(self, client: AsyncClient, admin: Account, table):
        response = await client.delete(f"{TABLES}/{table.id}", headers=admin.headers)

        assert response.status_code == 204
        assert (await client.get(TABLES)).json() == []
        detail = await client.get(f"{TABLES}/{table.id}")
        assert detail.status_code == 200
        assert detail.json()["is_active"] is False

    async def test_writes_require_staff(self, client: AsyncClient, customer: Account):
        response = await client.post(TABLES, json={"number": "M5"}, headers=customer.headers)

        assert response.status_code == 403

    async def test_unknown_table(self, client: AsyncClient):
        response = await client.get(f"{TABLES}/9999")

        assert response.status_code == 404


class TestTableStatus:
    async def test_available_listing(self, client: AsyncClient, seller: Account, product, table):
        free = (await client.post(TABLES, json={"number": "M2"}, headers=seller.headers)).json()
        await _seat_order(client, seller, product.id, table.id)

        response = await client.get(f"{TABLES}/available")

        assert [t["id"] for t in response.json()] == [free["id"]]

    async def test_release_delivers_active_orders(self, client: AsyncClient, seller: Account, product, table):
        order = await _seat_order(client, seller, product.id, table.id)

        response = await client.patch(
            f"{TABLES}/{table.id}/status", json={"status": "available"}, headers=seller.headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == "available"
        order_view = (await client.get(f"{API}/orders/{order['id']}", headers=seller.headers)).json()
        assert order_view["order_status_id"] == DELIVERED
        history = (await client.get(f"{API}/orders/{order['id']}/history", headers=seller.headers)).json()
        assert [h["order_status_id"] for h in history] == [PENDING, DELIVERED]
        assert history[-1]["comment"] == f"Table {table.number} released"

    async def test_reserving_keeps_orders_open(self, client: AsyncClient, seller: Account, product, table):
        order = await _seat_order(client, seller, product.id, table.id)

        response = await client.patch(
            f"{TABLES}/{table.id}/status", json={"status": "reserved"}, headers=seller.headers
        )

        assert response.json()["status"] == "reserved"
        order_view = (await client.get(f"{API}/orders/{order['id']}", headers=seller.headers)).json()
        assert order_view["order_status_id"] == PENDING

    async def test_unknown_status_value(self, client: AsyncClient, seller: Account, table):
        response = await client.patch(f"{TABLES}/{table.id}/status", json={"status": "broken"}, headers=seller.headers)

        assert response.status_code == 422


class TestTablesWithOrders:
    async def test_lists_tables_with_latest_active_order(self, client: AsyncClient, seller: Account, product, table):
        await _seat_order(client, seller, product.id, table.id)
        latest = await _seat_order(client, seller, product.id, table.id)
        await client.post(TABLES, json={"number": "M2"}, headers=seller.headers)

        response = await client.get(f"{TABLES}/with-orders")

        assert response.status_code == 200
        views = response.json()
        assert [v["id"] for v in views] == [table.id]
        assert views[0]["status"] == "occupied"
        assert views[0]["active_order"]["id"] == latest["id"]

    async def test_reconciles_stale_status(
        self, client: AsyncClient, admin: Account, seller: Account, product, table
    ):
        order = await _seat_order(client, seller, product.id, table.id)
        await client.put(
            f"{API}/orders/{order['id']}/status", json={"order_status_id": DELIVERED}, headers=admin.headers
        )
        assert (await client.get(f"{TABLES}/{table.id}")).json()["status"] == "occupied"

        response = await client.get(f"{TABLES}/with-orders")

        assert response.json() == []
        assert (await client.get(f"{TABLES}/{table.id}")).json()["status"] == "available"

    async def test_reserved_tables_are_not_reconciled(self, client: AsyncClient, seller: Account, table):
        await client.patch(f"{TABLES}/{table.id}/status", json={"status": "reserved"}, headers=seller.headers)

        await client.get(f"{TABLES}/with-orders")

        assert (await client.get(f"{TABLES}/{table.id}")).json()["status"] == "reserved"
