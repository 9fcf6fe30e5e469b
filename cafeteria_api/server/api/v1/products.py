"""
Product catalog endpoints.

Public listing and detail reads, admin management with an image gallery,
and seller routes restricted to the seller's own products.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from cafeteria_api.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from cafeteria_api.core.logging_config import get_logger
from cafeteria_api.core.models.io.common import ErrorResponse, Page
from cafeteria_api.core.models.io.products import (
    ProductCreate,
    ProductDetailRead,
    ProductImageCreate,
    ProductImageRead,
    ProductRead,
    ProductUpdate,
)
from cafeteria_api.server.services.deps import AdminDep, ProductServiceDep, SellerDep

logger = get_logger(__name__)

router = APIRouter(tags=["products"])


@router.get(
    "",
    response_model=Page[ProductRead],
    summary="List Products",
    description="List products ordered by name, with optional category, seller, availability and name filters.",
    response_description="One page of products.",
)
async def list_products(
    products: ProductServiceDep,
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    category_id: Optional[int] = None,
    seller_id: Optional[int] = None,
    is_available: Optional[bool] = None,
    search: Optional[str] = Query(None, description="Case-insensitive substring of the product name"),
) -> Page[ProductRead]:
    """
    List products.

    - **category_id**: Only products in this category.
    - **seller_id**: Only products owned by this seller.
    - **is_available**: Filter on the availability flag.
    - **search**: Case-insensitive substring match on the name.
    """
    filters = {"category_id": category_id, "seller_id": seller_id, "is_available": is_available, "search": search}
    items, total = await products.list_products(filters, limit=page_size, offset=(page - 1) * page_size)
    return Page[ProductRead].build([ProductRead.model_validate(p) for p in items], total, page, page_size)


@router.get(
    "/{product_id}",
    response_model=ProductDetailRead,
    summary="Get Product",
    description="Read one product with its gallery ordered by position.",
    responses={404: {"model": ErrorResponse, "description": "Product not found"}},
)
async def get_product(product_id: int, products: ProductServiceDep) -> ProductDetailRead:
    product = await products.get_product_detail(product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Product {product_id} not found")
    return product


# ==================== ADMIN ====================


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Product",
    description="Create a product. URLs in `extra_images` are stored in the gallery at positions 1..n.",
    responses={404: {"model": ErrorResponse, "description": "Category not found"}},
)
async def create_product(data: ProductCreate, admin: AdminDep, products: ProductServiceDep) -> ProductRead:
    return ProductRead.model_validate(await products.create_product(data))


@router.put(
    "/{product_id}",
    response_model=ProductRead,
    summary="Update Product",
    responses={404: {"model": ErrorResponse, "description": "Product or category not found"}},
)
async def update_product(
    product_id: int, data: ProductUpdate, admin: AdminDep, products: ProductServiceDep
) -> ProductRead:
    return ProductRead.model_validate(await products.update_product(product_id, data))


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Product",
    description="Delete a product together with its images and reviews. Products that appear in orders are kept.",
    responses={
        400: {"model": ErrorResponse, "description": "Product is referenced by orders"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
)
async def delete_product(product_id: int, admin: AdminDep, products: ProductServiceDep) -> None:
    await products.delete_product(product_id)


@router.post(
    "/{product_id}/images",
    response_model=ProductImageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Product Image",
    description="Append an image to the gallery, after the current last position.",
)
async def add_image(
    product_id: int, data: ProductImageCreate, admin: AdminDep, products: ProductServiceDep
) -> ProductImageRead:
    return ProductImageRead.model_validate(await products.add_image(product_id, data))


@router.delete(
    "/{product_id}/images/{image_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Product Image",
)
async def delete_image(product_id: int, image_id: int, admin: AdminDep, products: ProductServiceDep) -> None:
    await products.delete_image(product_id, image_id)


# ==================== SELLER ====================


@router.post(
    "/seller",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Own Product",
    description="Create a product owned by the calling seller.",
)
async def create_seller_product(data: ProductCreate, seller: SellerDep, products: ProductServiceDep) -> ProductRead:
    product = await products.create_product(data, seller_id=seller.id)
    logger.debug(f"Seller {seller.id} created product {product.id}")
    return ProductRead.model_validate(product)


@router.put(
    "/{product_id}/seller",
    response_model=ProductRead,
    summary="Update Own Product",
    responses={403: {"model": ErrorResponse, "description": "Product belongs to another seller"}},
)
async def update_seller_product(
    product_id: int, data: ProductUpdate, seller: SellerDep, products: ProductServiceDep
) -> ProductRead:
    return ProductRead.model_validate(await products.update_seller_product(product_id, data, seller))


@router.delete(
    "/{product_id}/seller",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Own Product",
    responses={403: {"model": ErrorResponse, "description": "Product belongs to another seller"}},
)
async def delete_seller_product(product_id: int, seller: SellerDep, products: ProductServiceDep) -> None:
    await products.delete_seller_product(product_id, seller)
