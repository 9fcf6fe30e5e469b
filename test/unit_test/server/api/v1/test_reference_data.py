"""Tests for payment methods and order statuses."""

import pytest
from httpx import AsyncClient

from test.unit_test.server.support import API, CASH, TRANSFER, Account

pytestmark = pytest.mark.asyncio


class TestPaymentMethods:
    async def test_seeded_methods(self, client: AsyncClient):
        response = await client.get(f"{API}/payment-methods")

        assert response.status_code == 200
        assert [m["name"] for m in response.json()] == ["cash", "credit_card", "debit_card", "transfer"]

    async def test_active_only(self, client: AsyncClient, admin: Account):
        await client.put(f"{API}/payment-methods/{TRANSFER}", json={"is_active": False}, headers=admin.headers)

        everything = await client.get(f"{API}/payment-methods")
        active = await client.get(f"{API}/payment-methods", params={"active_only": True})

        assert len(everything.json()) == 4
        assert "transfer" not in [m["name"] for m in active.json()]

    async def test_create_duplicate(self, client: AsyncClient, admin: Account):
        created = await client.post(f"{API}/payment-methods", json={"name": "voucher"}, headers=admin.headers)
        duplicate = await client.post(f"{API}/payment-methods", json={"name": "voucher"}, headers=admin.headers)

        assert created.status_code == 201
        assert duplicate.status_code == 409
        assert duplicate.json()["code"] == "PAYMENT_METHOD_EXISTS"

    async def test_delete_unused(self, client: AsyncClient, admin: Account):
        created = (await client.post(f"{API}/payment-methods", json={"name": "voucher"}, headers=admin.headers)).json()

        response = await client.delete(f"{API}/payment-methods/{created['id']}", headers=admin.headers)

        assert response.status_code == 204
        assert (await client.get(f"{API}/payment-methods/{created['id']}")).status_code == 404

    async def test_delete_in_use(self, client: AsyncClient, admin: Account, seller: Account, product):
        await client.post(
            f"{API}/orders/direct",
            json={"items": [{"product_id": product.id, "quantity": 1}], "payment_method_id": CASH},
            headers=seller.headers,
        )

        response = await client.delete(f"{API}/payment-methods/{CASH}", headers=admin.headers)

        assert response.status_code == 400
        assert response.json()["code"] == "PAYMENT_METHOD_IN_USE"

    async def test_writes_require_admin(self, client: AsyncClient, customer: Account):
        response = await client.post(f"{API}/payment-methods", json={"name": "voucher"}, headers=customer.headers)

        assert response.status_code == 403


class TestOrderStatuses:
    async def test_seeded_statuses(self, client: AsyncClient):
        response = await client.get(f"{API}/order-statuses")

        assert [(s["id"], s["name"]) for s in response.json()] == [
            (1, "pending"),
            (2, "processing"),
            (3, "shipped"),
            (4, "delivered"),
            (5, "cancelled"),
        ]

    async def test_get_unknown_status(self, client: AsyncClient):
        response = await client.get(f"{API}/order-statuses/99")

        assert response.status_code == 404

    async def test_rename_conflict(self, client: AsyncClient, admin: Account):
        response = await client.put(f"{API}/order-statuses/2", json={"name": "pending"}, headers=admin.headers)

        assert response.status_code == 409
        assert response.json()["code"] == "ORDER_STATUS_EXISTS"

    async def test_create_and_delete(self, client: AsyncClient, admin: Account):
        created = await client.post(
            f"{API}/order-statuses", json={"name": "ready", "description": "Listo para retiro"}, headers=admin.headers
        )
        assert created.status_code == 201

        deleted = await client.delete(f"{API}/order-statuses/{created.json()['id']}", headers=admin.headers)
        assert deleted.status_code == 204
