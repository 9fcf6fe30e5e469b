"""
Category endpoints. Reads are public; writes are admin only.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from cafeteria_api.core.models.io.categories import CategoryCreate, CategoryRead, CategoryUpdate
from cafeteria_api.core.models.io.common import ErrorResponse
from cafeteria_api.server.services.deps import AdminDep, CategoryServiceDep

router = APIRouter(tags=["categories"])


@router.get(
    "",
    response_model=List[CategoryRead],
    summary="List Categories",
    description="List every category ordered by name.",
)
async def list_categories(categories: CategoryServiceDep) -> List[CategoryRead]:
    return [CategoryRead.model_validate(c) for c in await categories.list_categories()]


@router.get(
    "/{category_id}",
    response_model=CategoryRead,
    summary="Get Category",
    responses={404: {"model": ErrorResponse, "description": "Category not found"}},
)
async def get_category(category_id: int, categories: CategoryServiceDep) -> CategoryRead:
    category = await categories.get_category(category_id)
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Category {category_id} not found")
    return CategoryRead.model_validate(category)


@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED, summary="Create Category")
async def create_category(data: CategoryCreate, admin: AdminDep, categories: CategoryServiceDep) -> CategoryRead:
    return CategoryRead.model_validate(await categories.create_category(data))


@router.put(
    "/{category_id}",
    response_model=CategoryRead,
    summary="Update Category",
    responses={404: {"model": ErrorResponse, "description": "Category not found"}},
)
async def update_category(
    category_id: int, data: CategoryUpdate, admin: AdminDep, categories: CategoryServiceDep
) -> CategoryRead:
    return CategoryRead.model_validate(await categories.update_category(category_id, data))


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Category",
    description="Delete a category. Categories that still have products cannot be deleted.",
    responses={
        400: {"model": ErrorResponse, "description": "Category still has products"},
        404: {"model": ErrorResponse, "description": "Category not found"},
    },
)
async def delete_category(category_id: int, admin: AdminDep, categories: CategoryServiceDep) -> None:
    await categories.delete_category(category_id)
