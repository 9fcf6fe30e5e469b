"""Tests for the customer account endpoints: auth, profile, addresses and admin views."""

from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from test.settings import test_settings
from test.unit_test.server.support import API, Account

pytestmark = pytest.mark.asyncio

PASSWORD = test_settings.accounts.password


def _register_payload(**overrides):
    payload = {
        "first_name": "Camila",
        "last_name": "Perez",
        "email": "camila@cafeteria.cl",
        "password": "cafe-secret-1",
        "phone": "+56912345678",
    }
    payload.update(overrides)
    return payload


class TestRegisterAndLogin:
    async def test_register_returns_user_and_token(self, client: AsyncClient):
        response = await client.post(f"{API}/users/register", json=_register_payload())

        assert response.status_code == 201
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["user"]["email"] == "camila@cafeteria.cl"
        assert data["user"]["role"] == "customer"
        assert "password_hash" not in data["user"]

    async def test_register_token_authenticates(self, client: AsyncClient):
        token = (await client.post(f"{API}/users/register", json=_register_payload())).json()["access_token"]

        response = await client.get(f"{API}/users/verify", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["email"] == "camila@cafeteria.cl"

    async def test_register_duplicate_email_conflicts(self, client: AsyncClient, customer: Account):
        response = await client.post(f"{API}/users/register", json=_register_payload(email=customer.entity.email))

        assert response.status_code == 409
        assert response.json()["code"] == "EMAIL_TAKEN"

    async def test_register_rejects_short_password(self, client: AsyncClient):
        response = await client.post(f"{API}/users/register", json=_register_payload(password="123"))

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert any("password" in error["loc"] for error in body["details"])

    async def test_login_success(self, client: AsyncClient, customer: Account):
        response = await client.post(
            f"{API}/users/login", json={"email": customer.entity.email, "password": PASSWORD}
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == customer.id

    async def test_login_wrong_password(self, client: AsyncClient, customer: Account):
        response = await client.post(
            f"{API}/users/login", json={"email": customer.entity.email, "password": "not-the-password"}
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"
        assert response.headers["www-authenticate"] == "Bearer"

    async def test_login_unknown_email(self, client: AsyncClient):
        response = await client.post(f"{API}/users/login", json={"email": "nobody@cafeteria.cl", "password": PASSWORD})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"

    async def test_login_inactive_user(self, client: AsyncClient, make_user):
        inactive = await make_user(email="old@cafeteria.cl", is_active=False)

        response = await client.post(f"{API}/users/login", json={"email": inactive.entity.email, "password": PASSWORD})

        assert response.status_code == 401
        assert response.json()["code"] == "USER_INACTIVE"


class TestTokenHandling:
    async def test_missing_token(self, client: AsyncClient):
        response = await client.get(f"{API}/users/profile")

        assert response.status_code == 401
        assert response.json()["code"] == "NO_TOKEN"

    async def test_garbage_token(self, client: AsyncClient):
        response = await client.get(f"{API}/users/profile", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    async def test_token_of_deleted_user_is_rejected(
        self, client: AsyncClient, session: AsyncSession, customer: Account
    ):
        await session.delete(customer.entity)
        await session.commit()

        response = await client.get(f"{API}/users/profile", headers=customer.headers)

        assert response.status_code == 401
        assert response.json()["code"] == "USER_NOT_FOUND"

    async def test_seller_token_rejected_on_user_route(self, client: AsyncClient, seller: Account):
        response = await client.get(f"{API}/users/profile", headers=seller.headers)

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN_TYPE"

    async def test_deactivated_user_token_stops_working(self, client: AsyncClient, admin: Account, customer: Account):
        await client.put(f"{API}/users/{customer.id}/status", json={"is_active": False}, headers=admin.headers)

        response = await client.get(f"{API}/users/profile", headers=customer.headers)

        assert response.status_code == 401
        assert response.json()["code"] == "USER_INACTIVE"


class TestProfile:
    async def test_get_profile(self, client: AsyncClient, customer: Account):
        response = await client.get(f"{API}/users/profile", headers=customer.headers)

        assert response.status_code == 200
        assert response.json()["id"] == customer.id

    async def test_update_profile_partial(self, client: AsyncClient, customer: Account):
        response = await client.put(
            f"{API}/users/profile", json={"first_name": "Anita"}, headers=customer.headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["first_name"] == "Anita"
        assert data["last_name"] == customer.entity.last_name

    async def test_update_profile_rejects_null_name(self, client: AsyncClient, customer: Account):
        response = await client.put(f"{API}/users/profile", json={"first_name": None}, headers=customer.headers)

        assert response.status_code == 422
        profile = (await client.get(f"{API}/users/profile", headers=customer.headers)).json()
        assert profile["first_name"] == customer.entity.first_name

    async def test_update_profile_email_taken(
        self, client: AsyncClient, customer: Account, other_customer: Account
    ):
        response = await client.put(
            f"{API}/users/profile", json={"email": other_customer.entity.email}, headers=customer.headers
        )

        assert response.status_code == 409

    async def test_change_password(self, client: AsyncClient, customer: Account):
        response = await client.put(
            f"{API}/users/change-password",
            json={"current_password": PASSWORD, "new_password": "brand-new-pass"},
            headers=customer.headers,
        )
        assert response.status_code == 200

        login = await client.post(
            f"{API}/users/login", json={"email": customer.entity.email, "password": "brand-new-pass"}
        )
        assert login.status_code == 200

    async def test_change_password_wrong_current(self, client: AsyncClient, customer: Account):
        response = await client.put(
            f"{API}/users/change-password",
            json={"current_password": "wrong-password", "new_password": "brand-new-pass"},
            headers=customer.headers,
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"


ADDRESS = {"street": "Av. Providencia", "number": "1234", "city": "Santiago", "district": "Providencia"}


class TestAddresses:
    async def _create(self, client: AsyncClient, account: Account, **overrides):
        response = await client.post(f"{API}/users/addresses", json={**ADDRESS, **overrides}, headers=account.headers)
        assert response.status_code == 201
        return response.json()

    async def test_first_address_becomes_primary(self, client: AsyncClient, customer: Account):
        address = await self._create(client, customer)

        assert address["is_primary"] is True
        assert address["user_id"] == customer.id
        assert address["country"] == "Chile"

    async def test_second_address_is_not_primary_by_default(self, client: AsyncClient, customer: Account):
        await self._create(client, customer)
        second = await self._create(client, customer, street="Los Leones")

        assert second["is_primary"] is False

    async def test_new_primary_demotes_others(self, client: AsyncClient, customer: Account):
        first = await self._create(client, customer)
        second = await self._create(client, customer, street="Los Leones", is_primary=True)

        listing = (await client.get(f"{API}/users/addresses", headers=customer.headers)).json()

        assert [a["id"] for a in listing] == [second["id"], first["id"]]
        assert [a["is_primary"] for a in listing] == [True, False]

    async def test_set_primary(self, client: AsyncClient, customer: Account):
        first = await self._create(client, customer)
        second = await self._create(client, customer, street="Los Leones")

        response = await client.put(f"{API}/users/addresses/{second['id']}/primary", headers=customer.headers)
        assert response.status_code == 200
        assert response.json()["is_primary"] is True

        listing = (await client.get(f"{API}/users/addresses", headers=customer.headers)).json()
        primaries = [a["id"] for a in listing if a["is_primary"]]
        assert primaries == [second["id"]]
        assert first["id"] in [a["id"] for a in listing]

    async def test_update_address(self, client: AsyncClient, customer: Account):
        address = await self._create(client, customer)

        response = await client.put(
            f"{API}/users/addresses/{address['id']}", json={"city": "Valparaiso"}, headers=customer.headers
        )

        assert response.status_code == 200
        assert response.json()["city"] == "Valparaiso"
        assert response.json()["street"] == ADDRESS["street"]

    async def test_update_address_null_city_rejected_null_district_clears(self, client: AsyncClient, customer: Account):
        address = await self._create(client, customer)
        url = f"{API}/users/addresses/{address['id']}"

        rejected = await client.put(url, json={"city": None}, headers=customer.headers)
        cleared = await client.put(url, json={"district": None}, headers=customer.headers)

        assert rejected.status_code == 422
        assert cleared.status_code == 200
        assert cleared.json()["city"] == ADDRESS["city"]
        assert cleared.json()["district"] is None

    async def test_cannot_touch_another_users_address(
        self, client: AsyncClient, customer: Account, other_customer: Account
    ):
        address = await self._create(client, customer)

        update = await client.put(
            f"{API}/users/addresses/{address['id']}", json={"city": "Temuco"}, headers=other_customer.headers
        )
        delete = await client.delete(f"{API}/users/addresses/{address['id']}", headers=other_customer.headers)

        assert update.status_code == 404
        assert delete.status_code == 404

    async def test_deleting_primary_promotes_oldest_remaining(self, client: AsyncClient, customer: Account):
        first = await self._create(client, customer)
        second = await self._create(client, customer, street="Los Leones")
        third = await self._create(client, customer, street="Apoquindo")

        response = await client.delete(f"{API}/users/addresses/{first['id']}", headers=customer.headers)
        assert response.status_code == 204

        listing = (await client.get(f"{API}/users/addresses", headers=customer.headers)).json()
        assert [a["id"] for a in listing] == [second["id"], third["id"]]
        assert listing[0]["is_primary"] is True
        assert listing[1]["is_primary"] is False


class TestAdminUsers:
    async def test_list_users_requires_admin(self, client: AsyncClient, customer: Account):
        response = await client.get(f"{API}/users", headers=customer.headers)

        assert response.status_code == 403
        assert response.json()["code"] == "INSUFFICIENT_PERMISSIONS"

    async def test_list_users_paginated(self, client: AsyncClient, admin: Account, make_user):
        for _ in range(3):
            await make_user()

        response = await client.get(f"{API}/users", params={"page": 1, "page_size": 2}, headers=admin.headers)

        assert response.status_code == 200
        page = response.json()
        assert page["total"] == 4
        assert page["pages"] == 2
        assert len(page["items"]) == 2

    async def test_list_users_search_and_filter(
        self, client: AsyncClient, admin: Account, customer: Account, make_user
    ):
        await make_user(email="gone@cafeteria.cl", is_active=False, first_name="Gonzalo")

        by_name = await client.get(f"{API}/users", params={"search": "gonz"}, headers=admin.headers)
        inactive = await client.get(f"{API}/users", params={"is_active": False}, headers=admin.headers)

        assert [u["email"] for u in by_name.json()["items"]] == ["gone@cafeteria.cl"]
        assert [u["email"] for u in inactive.json()["items"]] == ["gone@cafeteria.cl"]

    async def test_get_user_includes_roles(self, client: AsyncClient, admin: Account, customer: Account):
        response = await client.get(f"{API}/users/{customer.id}", headers=admin.headers)

        assert response.status_code == 200
        assert response.json()["roles"] == ["customer"]

    async def test_get_unknown_user(self, client: AsyncClient, admin: Account):
        response = await client.get(f"{API}/users/9999", headers=admin.headers)

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    async def test_set_user_status(self, client: AsyncClient, admin: Account, customer: Account):
        response = await client.put(
            f"{API}/users/{customer.id}/status", json={"is_active": False}, headers=admin.headers
        )

        assert response.status_code == 200
        assert response.json()["is_active"] is False
