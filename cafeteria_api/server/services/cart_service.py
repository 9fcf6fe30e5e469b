"""
Shopping cart service.

Every mutation re-reads the cart lines and stores ``total`` as
sum(quantity * current product price).
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria_api.core.constants import MAX_CART_QUANTITY, quantize_money
from cafeteria_api.core.database.entities.carts import Cart, CartItem
from cafeteria_api.core.database.entities.products import Product
from cafeteria_api.core.database.repositories import build_sql_repos_from_session
from cafeteria_api.core.errors import BusinessRuleError, NotFoundError
from cafeteria_api.core.logging_config import get_logger
from cafeteria_api.core.models.io.carts import CartItemAdd, CartItemRead, CartItemUpdate, CartRead

logger = get_logger(__name__)


class CartService:
    """Service for the caller's shopping cart."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    async def get_or_create_cart(self, user_id: int) -> Cart:
        cart = await self.repos.carts.get_by_user(user_id)
        if cart is None:
            cart = await self.repos.carts.create(Cart(user_id=user_id))
            logger.debug(f"Created cart {cart.id} for user {user_id}")
        return cart

    async def view(self, cart: Cart) -> CartRead:
        lines = await self.repos.carts.list_items_with_products(cart.id)
        items = [
            CartItemRead(
                product_id=product.id,
                product_name=product.name,
                image_url=product.image_url,
                unit_price=float(product.price),
                quantity=item.quantity,
                subtotal=float(quantize_money(product.price * item.quantity)),
            )
            for item, product in lines
        ]
        return CartRead(
            id=cart.id,
            user_id=cart.user_id,
            items=items,
            item_count=sum(item.quantity for item, _ in lines),
            total=float(cart.total),
            updated_at=cart.updated_at,
        )

    async def get_cart(self, user_id: int) -> CartRead:
        return await self.view(await self.get_or_create_cart(user_id))

    async def _recalculate(self, cart: Cart) -> CartRead:
        """Recompute the total from current prices, commit, and return the cart view."""
        lines = await self.repos.carts.list_items_with_products(cart.id)
        cart.total = quantize_money(sum((product.price * item.quantity for item, product in lines), Decimal("0")))
        await self.repos.carts.update(cart)
        return await self.view(cart)

    @staticmethod
    def _check_supply(product: Product, quantity: int) -> None:
        if not product.is_available:
            raise BusinessRuleError(f"Product '{product.name}' is not available", code="PRODUCT_UNAVAILABLE")
        if quantity > MAX_CART_QUANTITY:
            raise BusinessRuleError(
                f"At most {MAX_CART_QUANTITY} units per product",
                code="QUANTITY_LIMIT",
                details={"product_id": product.id, "max_quantity": MAX_CART_QUANTITY},
            )
        if not product.can_supply(quantity):
            raise BusinessRuleError(
                f"Insufficient stock for '{product.name}'",
                code="INSUFFICIENT_STOCK",
                details={"product_id": product.id, "available": product.stock, "requested": quantity},
            )

    async def _require_product(self, product_id: int) -> Product:
        product = await self.repos.products.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    async def add_item(self, user_id: int, data: CartItemAdd) -> CartRead:
        """
        Add a product, merging into an existing line.

        Raises:
            NotFoundError: Unknown product
            BusinessRuleError: Unavailable, out of stock, or merged quantity above the limit
        """
        product = await self._require_product(data.product_id)
        cart = await self.get_or_create_cart(user_id)
        item = await self.repos.carts.get_item(cart.id, product.id)

        quantity = data.quantity + (item.quantity if item else 0)
        self._check_supply(product, quantity)

        if item is None:
            await self.repos.carts.add_item(CartItem(cart_id=cart.id, product_id=product.id, quantity=quantity))
        else:
            item.quantity = quantity
            self.session.add(item)
        return await self._recalculate(cart)

    async def update_item(self, user_id: int, data: CartItemUpdate) -> CartRead:
        """Set a line's quantity. Quantity 0 removes the line."""
        cart = await self.get_or_create_cart(user_id)
        item = await self.repos.carts.get_item(cart.id, data.product_id)
        if item is None:
            raise NotFoundError("Cart item", data.product_id)

        if data.quantity == 0:
            await self.repos.carts.remove_item(item)
        else:
            product = await self._require_product(data.product_id)
            self._check_supply(product, data.quantity)
            item.quantity = data.quantity
            self.session.add(item)
        return await self._recalculate(cart)

    async def remove_item(self, user_id: int, product_id: int) -> CartRead:
        cart = await self.get_or_create_cart(user_id)
        item = await self.repos.carts.get_item(cart.id, product_id)
        if item is None:
            raise NotFoundError("Cart item", product_id)
        await self.repos.carts.remove_item(item)
        return await self._recalculate(cart)

    async def clear(self, user_id: int) -> CartRead:
        cart = await self.get_or_create_cart(user_id)
        await self.repos.carts.clear(cart.id)
        return await self._recalculate(cart)
