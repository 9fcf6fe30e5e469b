"""Unit tests for entity models.

Tests SQLModel validation of the ``*Base`` field constraints and the small
helpers defined on table models.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from cafeteria_api.core.constants import MAX_CART_QUANTITY, TableStatus
from cafeteria_api.core.database.entities.addresses import AddressBase
from cafeteria_api.core.database.entities.carts import CartItemBase
from cafeteria_api.core.database.entities.categories import CategoryBase
from cafeteria_api.core.database.entities.dining_tables import DiningTableBase
from cafeteria_api.core.database.entities.order_statuses import OrderStatus
from cafeteria_api.core.database.entities.products import Product, ProductBase
from cafeteria_api.core.database.entities.reviews import ReviewBase
from cafeteria_api.core.database.entities.users import User, UserBase


class TestUser:
    def test_defaults(self):
        user = UserBase(first_name="Ana", last_name="Rojas", email="ana@cafeteria.cl")

        assert user.is_active is True
        assert user.role == "customer"
        assert user.phone is None

    def test_short_first_name_rejected(self):
        with pytest.raises(ValidationError):
            UserBase(first_name="A", last_name="Rojas", email="ana@cafeteria.cl")

    def test_full_name(self):
        user = User(first_name="Ana", last_name="Rojas", email="ana@cafeteria.cl", password_hash="x")

        assert user.full_name == "Ana Rojas"
        assert "ana@cafeteria.cl" in repr(user)


class TestProduct:
    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            ProductBase(name="Latte", price=Decimal("-1"))

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            ProductBase(name="Latte", price=Decimal("1000"), stock=-1)

    def test_price_precision(self):
        with pytest.raises(ValidationError):
            ProductBase(name="Latte", price=Decimal("1.234"))

    @pytest.mark.parametrize(
        "is_available,stock,quantity,expected",
        [
            (True, 5, 5, True),
            (True, 5, 6, False),
            (False, 5, 1, False),
        ],
    )
    def test_can_supply(self, is_available, stock, quantity, expected):
        product = Product(name="Latte", price=Decimal("2500"), stock=stock, is_available=is_available, category_id=1)

        assert product.can_supply(quantity) is expected


class TestCartItem:
    def test_quantity_bounds(self):
        assert CartItemBase(product_id=1, quantity=MAX_CART_QUANTITY).quantity == MAX_CART_QUANTITY

        with pytest.raises(ValidationError):
            CartItemBase(product_id=1, quantity=MAX_CART_QUANTITY + 1)
        with pytest.raises(ValidationError):
            CartItemBase(product_id=1, quantity=0)


class TestReview:
    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            ReviewBase(rating=rating)

    def test_comment_optional(self):
        assert ReviewBase(rating=5).comment is None


class TestDiningTable:
    def test_defaults(self):
        table = DiningTableBase(number="M1")

        assert table.capacity == 4
        assert table.status == TableStatus.AVAILABLE
        assert table.is_active is True

    def test_status_coerced_from_string(self):
        assert DiningTableBase(number="M1", status="reserved").status == TableStatus.RESERVED

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            DiningTableBase(number="M1", status="broken")

    def test_capacity_bounds(self):
        with pytest.raises(ValidationError):
            DiningTableBase(number="M1", capacity=21)


class TestMisc:
    def test_address_country_default(self):
        address = AddressBase(street="Av. Matta", number="10", city="Santiago")

        assert address.country == "Chile"
        assert address.is_primary is False

    def test_category_name_length(self):
        with pytest.raises(ValidationError):
            CategoryBase(name="B")

    @pytest.mark.parametrize(
        "name,final",
        [("pending", False), ("shipped", False), ("delivered", True), ("Cancelled", True)],
    )
    def test_order_status_is_final(self, name, final):
        assert OrderStatus(name=name).is_final is final
