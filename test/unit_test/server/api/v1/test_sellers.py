"""Tests for seller accounts: login, admin management and self-service."""

import pytest
from httpx import AsyncClient

from test.settings import test_settings
from test.unit_test.server.support import API, Account

pytestmark = pytest.mark.asyncio

PASSWORD = test_settings.accounts.password

NEW_SELLER = {
    "first_name": "Rosa",
    "last_name": "Diaz",
    "email": "rosa@cafeteria.cl",
    "password": "rosa-pass-1",
    "hired_at": "2025-03-01",
}


class TestSellerLogin:
    async def test_login_returns_seller_token(self, client: AsyncClient, seller: Account):
        response = await client.post(
            f"{API}/sellers/login", json={"email": seller.entity.email, "password": PASSWORD}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["seller"]["id"] == seller.id
        assert data["token_type"] == "bearer"

    async def test_seller_token_reads_own_account(self, client: AsyncClient, seller: Account):
        token = (
            await client.post(f"{API}/sellers/login", json={"email": seller.entity.email, "password": PASSWORD})
        ).json()["access_token"]

        response = await client.get(f"{API}/sellers/{seller.id}", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["email"] == seller.entity.email

    async def test_login_wrong_password(self, client: AsyncClient, seller: Account):
        response = await client.post(f"{API}/sellers/login", json={"email": seller.entity.email, "password": "nope"})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"

    async def test_user_credentials_do_not_open_seller_login(self, client: AsyncClient, customer: Account):
        response = await client.post(
            f"{API}/sellers/login", json={"email": customer.entity.email, "password": PASSWORD}
        )

        assert response.status_code == 401


class TestSellerAdministration:
    async def test_create_and_list(self, client: AsyncClient, admin: Account):
        created = await client.post(f"{API}/sellers", json=NEW_SELLER, headers=admin.headers)
        assert created.status_code == 201
        assert created.json()["hired_at"] == "2025-03-01"

        listing = await client.get(f"{API}/sellers", headers=admin.headers)
        assert [s["email"] for s in listing.json()] == ["rosa@cafeteria.cl"]

    async def test_create_duplicate_email(self, client: AsyncClient, admin: Account, seller: Account):
        response = await client.post(
            f"{API}/sellers", json={**NEW_SELLER, "email": seller.entity.email}, headers=admin.headers
        )

        assert response.status_code == 409

    async def test_customer_cannot_manage_sellers(self, client: AsyncClient, customer: Account):
        response = await client.post(f"{API}/sellers", json=NEW_SELLER, headers=customer.headers)

        assert response.status_code == 403

    async def test_update_seller(self, client: AsyncClient, admin: Account, seller: Account):
        response = await client.put(f"{API}/sellers/{seller.id}", json={"is_active": False}, headers=admin.headers)

        assert response.status_code == 200
        assert response.json()["is_active"] is False

    async def test_delete_seller(self, client: AsyncClient, admin: Account, seller: Account):
        response = await client.delete(f"{API}/sellers/{seller.id}", headers=admin.headers)
        assert response.status_code == 204

        missing = await client.get(f"{API}/sellers/{seller.id}", headers=admin.headers)
        assert missing.status_code == 404

    async def test_token_of_deleted_seller_is_rejected(self, client: AsyncClient, admin: Account, seller: Account):
        await client.delete(f"{API}/sellers/{seller.id}", headers=admin.headers)

        response = await client.get(f"{API}/sellers/{seller.id}", headers=seller.headers)

        assert response.status_code == 401
        assert response.json()["code"] == "USER_NOT_FOUND"
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_delete_seller_with_products(
        self, client: AsyncClient, admin: Account, seller: Account, make_product
    ):
        await make_product(seller_id=seller.id)

        response = await client.delete(f"{API}/sellers/{seller.id}", headers=admin.headers)

        assert response.status_code == 400
        assert response.json()["code"] == "SELLER_HAS_PRODUCTS"


class TestSellerSelfService:
    async def test_seller_cannot_read_another_seller(self, client: AsyncClient, admin: Account, seller: Account):
        other = (await client.post(f"{API}/sellers", json=NEW_SELLER, headers=admin.headers)).json()

        response = await client.get(f"{API}/sellers/{other['id']}", headers=seller.headers)

        assert response.status_code == 403

    async def test_change_own_password(self, client: AsyncClient, seller: Account):
        response = await client.put(
            f"{API}/sellers/{seller.id}/change-password",
            json={"current_password": PASSWORD, "new_password": "new-seller-pass"},
            headers=seller.headers,
        )
        assert response.status_code == 200

        login = await client.post(
            f"{API}/sellers/login", json={"email": seller.entity.email, "password": "new-seller-pass"}
        )
        assert login.status_code == 200

    async def test_change_password_wrong_current(self, client: AsyncClient, seller: Account):
        response = await client.put(
            f"{API}/sellers/{seller.id}/change-password",
            json={"current_password": "wrong", "new_password": "new-seller-pass"},
            headers=seller.headers,
        )

        assert response.status_code == 401

    async def test_change_another_sellers_password(self, client: AsyncClient, admin: Account, seller: Account):
        other = (await client.post(f"{API}/sellers", json=NEW_SELLER, headers=admin.headers)).json()

        response = await client.put(
            f"{API}/sellers/{other['id']}/change-password",
            json={"current_password": PASSWORD, "new_password": "new-seller-pass"},
            headers=seller.headers,
        )

        assert response.status_code == 403

    async def test_user_token_rejected_for_seller_password_change(self, client: AsyncClient, customer: Account):
        response = await client.put(
            f"{API}/sellers/1/change-password",
            json={"current_password": PASSWORD, "new_password": "new-seller-pass"},
            headers=customer.headers,
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN_TYPE"
