"""
Product review endpoints.

Listing and the rating summary are public. Posting needs a user token;
editing and deleting are limited to the author or an admin.
"""

from typing import List

from fastapi import APIRouter, status

from cafeteria_api.core.models.io.common import ErrorResponse
from cafeteria_api.core.models.io.reviews import ReviewCreate, ReviewRead, ReviewSummary, ReviewUpdate
from cafeteria_api.server.services.deps import ReviewServiceDep, UserDep

router = APIRouter(tags=["reviews"])


@router.get(
    "/products/{product_id}/reviews",
    response_model=List[ReviewRead],
    summary="List Product Reviews",
    description="List a product's reviews, newest first.",
    responses={404: {"model": ErrorResponse, "description": "Product not found"}},
)
async def list_reviews(product_id: int, reviews: ReviewServiceDep) -> List[ReviewRead]:
    return [ReviewRead.model_validate(r) for r in await reviews.list_reviews(product_id)]


@router.get(
    "/products/{product_id}/reviews/summary",
    response_model=ReviewSummary,
    summary="Review Summary",
    description="Number of reviews and average rating of a product.",
)
async def review_summary(product_id: int, reviews: ReviewServiceDep) -> ReviewSummary:
    return await reviews.summary(product_id)


@router.post(
    "/products/{product_id}/reviews",
    response_model=ReviewRead,
    status_code=status.HTTP_201_CREATED,
    summary="Review Product",
    responses={
        404: {"model": ErrorResponse, "description": "Product not found"},
        409: {"model": ErrorResponse, "description": "Product already reviewed by this user"},
    },
)
async def create_review(
    product_id: int, data: ReviewCreate, principal: UserDep, reviews: ReviewServiceDep
) -> ReviewRead:
    """One review per user and product."""
    return ReviewRead.model_validate(await reviews.create_review(product_id, principal.id, data))


@router.put(
    "/reviews/{review_id}",
    response_model=ReviewRead,
    summary="Update Review",
    responses={403: {"model": ErrorResponse, "description": "Not the author"}},
)
async def update_review(
    review_id: int, data: ReviewUpdate, principal: UserDep, reviews: ReviewServiceDep
) -> ReviewRead:
    return ReviewRead.model_validate(await reviews.update_review(review_id, data, principal))


@router.delete(
    "/reviews/{review_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Review",
    responses={403: {"model": ErrorResponse, "description": "Not the author"}},
)
async def delete_review(review_id: int, principal: UserDep, reviews: ReviewServiceDep) -> None:
    await reviews.delete_review(review_id, principal)
