"""
Catalog service.

Categories, products with their image gallery, and product reviews.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria_api.core.constants import quantize_money
from cafeteria_api.core.database.entities.categories import Category
from cafeteria_api.core.database.entities.products import Product, ProductImage
from cafeteria_api.core.database.entities.reviews import Review
from cafeteria_api.core.database.repositories import build_sql_repos_from_session
from cafeteria_api.core.errors import BusinessRuleError, ConflictError, NotFoundError, PermissionDeniedError
from cafeteria_api.core.logging_config import get_logger
from cafeteria_api.core.models.io.categories import CategoryCreate, CategoryUpdate
from cafeteria_api.core.models.io.products import (
    ProductCreate,
    ProductDetailRead,
    ProductImageCreate,
    ProductImageRead,
    ProductUpdate,
)
from cafeteria_api.core.models.io.reviews import ReviewCreate, ReviewSummary, ReviewUpdate

from .auth_service import Principal

logger = get_logger(__name__)


class CategoryService:
    """Service for product categories."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    async def list_categories(self) -> List[Category]:
        return await self.repos.categories.list_by_name()

    async def get_category(self, category_id: int) -> Optional[Category]:
        return await self.repos.categories.get_by_id(category_id)

    async def create_category(self, data: CategoryCreate) -> Category:
        return await self.repos.categories.create(Category(**data.model_dump()))

    async def update_category(self, category_id: int, data: CategoryUpdate) -> Category:
        category = await self.repos.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(category, key, value)
        return await self.repos.categories.update(category)

    async def delete_category(self, category_id: int) -> None:
        """
        Delete an empty category.

        Raises:
            BusinessRuleError: Products still belong to the category
        """
        if await self.repos.categories.get_by_id(category_id) is None:
            raise NotFoundError("Category", category_id)
        if await self.repos.categories.has_products(category_id):
            raise BusinessRuleError("Category still has products", code="CATEGORY_HAS_PRODUCTS")
        await self.repos.categories.delete(category_id)


class ProductService:
    """Service for products and their gallery."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    async def list_products(
        self, filters: Dict[str, Any], limit: Optional[int] = None, offset: Optional[int] = None
    ) -> Tuple[List[Product], int]:
        products = await self.repos.products.list(limit=limit, offset=offset, filters=filters)
        total = await self.repos.products.count(filters)
        return products, total

    async def get_product_detail(self, product_id: int) -> Optional[ProductDetailRead]:
        product = await self.repos.products.get_by_id(product_id)
        if product is None:
            return None
        images = await self.repos.product_images.list_for_product(product_id)
        detail = ProductDetailRead.model_validate(product)
        detail.images = [ProductImageRead.model_validate(image) for image in images]
        return detail

    async def _require_product(self, product_id: int) -> Product:
        product = await self.repos.products.get_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    async def _require_category(self, category_id: int) -> None:
        if await self.repos.categories.get_by_id(category_id) is None:
            raise NotFoundError("Category", category_id)

    async def create_product(self, data: ProductCreate, seller_id: Optional[int] = None) -> Product:
        """Create a product and store any ``extra_images`` at positions 1..n."""
        await self._require_category(data.category_id)

        product = Product(**data.model_dump(exclude={"extra_images"}), seller_id=seller_id)
        product = await self.repos.products.create(product, commit=False)
        for position, url in enumerate(data.extra_images, start=1):
            await self.repos.product_images.create(
                ProductImage(product_id=product.id, url=url, position=position), commit=False
            )
        await self.session.commit()
        await self.session.refresh(product)
        logger.info(f"Created product {product.id} ({len(data.extra_images)} extra images)")
        return product

    async def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        product = await self._require_product(product_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("category_id") is not None:
            await self._require_category(changes["category_id"])
        for key, value in changes.items():
            setattr(product, key, value)
        return await self.repos.products.update(product)

    async def delete_product(self, product_id: int) -> None:
        """
        Delete a product along with its images, reviews and cart lines.

        Carts that held the product get their total recomputed in the same
        transaction.

        Raises:
            BusinessRuleError: An order references the product
        """
        await self._require_product(product_id)
        if await self.repos.products.is_ordered(product_id):
            raise BusinessRuleError("Product is referenced by orders", code="PRODUCT_IN_ORDERS")
        await self.repos.product_images.delete_for_product(product_id)
        await self.repos.reviews.delete_for_product(product_id)
        cart_ids = await self.repos.carts.remove_product_lines(product_id)
        await self.repos.products.delete(product_id, commit=False)
        for cart_id in cart_ids:
            cart = await self.repos.carts.get_by_id(cart_id)
            lines = await self.repos.carts.list_items_with_products(cart_id)
            cart.total = quantize_money(sum((p.price * item.quantity for item, p in lines), Decimal("0")))
            await self.repos.carts.update(cart, commit=False)
        await self.session.commit()
        logger.info(f"Deleted product {product_id} (removed from {len(cart_ids)} carts)")

    # ==================== SELLER-OWNED PRODUCTS ====================

    async def _require_owned(self, product_id: int, principal: Principal) -> Product:
        product = await self._require_product(product_id)
        if product.seller_id != principal.id:
            raise PermissionDeniedError("Product belongs to another seller")
        return product

    async def update_seller_product(self, product_id: int, data: ProductUpdate, principal: Principal) -> Product:
        await self._require_owned(product_id, principal)
        return await self.update_product(product_id, data)

    async def delete_seller_product(self, product_id: int, principal: Principal) -> None:
        await self._require_owned(product_id, principal)
        await self.delete_product(product_id)

    # ==================== IMAGES ====================

    async def add_image(self, product_id: int, data: ProductImageCreate) -> ProductImage:
        await self._require_product(product_id)
        position = await self.repos.product_images.next_position(product_id)
        return await self.repos.product_images.create(
            ProductImage(product_id=product_id, url=data.url, description=data.description, position=position)
        )

    async def delete_image(self, product_id: int, image_id: int) -> None:
        image = await self.repos.product_images.get_for_product(image_id, product_id)
        if image is None:
            raise NotFoundError("Product image", image_id)
        await self.repos.product_images.delete(image.id)


class ReviewService:
    """Service for product reviews."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repos = build_sql_repos_from_session(session=session)

    async def _require_product(self, product_id: int) -> None:
        if await self.repos.products.get_by_id(product_id) is None:
            raise NotFoundError("Product", product_id)

    async def list_reviews(self, product_id: int) -> List[Review]:
        await self._require_product(product_id)
        return await self.repos.reviews.list_for_product(product_id)

    async def summary(self, product_id: int) -> ReviewSummary:
        await self._require_product(product_id)
        count, average = await self.repos.reviews.summary(product_id)
        return ReviewSummary(
            product_id=product_id,
            count=count,
            average_rating=round(average, 2) if average is not None else None,
        )

    async def create_review(self, product_id: int, user_id: int, data: ReviewCreate) -> Review:
        """
        Post a review.

        Raises:
            NotFoundError: Unknown product
            ConflictError: The user already reviewed this product
        """
        await self._require_product(product_id)
        if await self.repos.reviews.get_for_user_and_product(user_id, product_id):
            raise ConflictError("Product already reviewed by this user", code="REVIEW_EXISTS")
        return await self.repos.reviews.create(Review(product_id=product_id, user_id=user_id, **data.model_dump()))

    async def _require_editable(self, review_id: int, principal: Principal) -> Review:
        review = await self.repos.reviews.get_by_id(review_id)
        if review is None:
            raise NotFoundError("Review", review_id)
        if review.user_id != principal.id and not principal.is_admin:
            raise PermissionDeniedError("Only the author or an admin may change this review")
        return review

    async def update_review(self, review_id: int, data: ReviewUpdate, principal: Principal) -> Review:
        review = await self._require_editable(review_id, principal)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(review, key, value)
        return await self.repos.reviews.update(review)

    async def delete_review(self, review_id: int, principal: Principal) -> None:
        await self._require_editable(review_id, principal)
        await self.repos.reviews.delete(review_id)
