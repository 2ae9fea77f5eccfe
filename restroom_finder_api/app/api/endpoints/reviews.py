"""
API endpoints for restroom reviews.

Anyone can read reviews; writing requires a token, and only the author
of a review may edit or delete it.  Every write refreshes the
restroom's average rating.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path

from restroom_finder_api.app.core.db import MAX_ID
from restroom_finder_api.app.core.responses import success
from restroom_finder_api.app.core.security import get_current_user
from restroom_finder_api.app.schemas.common import ApiResponse, ErrorResponse
from restroom_finder_api.app.schemas.review import ReviewCreate, ReviewRead, ReviewUpdate
from restroom_finder_api.app.services.review_service import ReviewService

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.get(
    "/get/{review_id}",
    response_model=ApiResponse[ReviewRead],
    responses=_ERRORS,
    summary="Get a review",
)
async def get_review(
    review_id: int = Path(..., ge=1, le=MAX_ID, description="Review ID (integer >= 1)"),
) -> Dict[str, Any]:
    return success(await ReviewService.get_review(review_id))


@router.post(
    "",
    response_model=ApiResponse[ReviewRead],
    responses=_ERRORS,
    summary="Write a review",
)
async def create_review(
    data: ReviewCreate,
    current_user: dict = Depends(get_current_user),
) -> Dict[str, Any]:
    """Create a review for a restroom as the current user."""
    return success(await ReviewService.create_review(current_user["user_id"], data))


@router.patch(
    "/{review_id}",
    response_model=ApiResponse[ReviewRead],
    responses=_ERRORS,
    summary="Edit a review",
)
async def update_review(
    data: ReviewUpdate,
    review_id: int = Path(..., ge=1, le=MAX_ID, description="Review ID (integer >= 1)"),
    current_user: dict = Depends(get_current_user),
) -> Dict[str, Any]:
    """Edit the content and rating of one of the caller's reviews."""
    return success(await ReviewService.update_review(current_user["user_id"], review_id, data))


@router.delete(
    "/{review_id}",
    response_model=ApiResponse[str],
    responses=_ERRORS,
    summary="Delete a review",
)
async def delete_review(
    review_id: int = Path(..., ge=1, le=MAX_ID, description="Review ID (integer >= 1)"),
    current_user: dict = Depends(get_current_user),
) -> Dict[str, Any]:
    await ReviewService.delete_review(current_user["user_id"], review_id)
    return success("Review deleted")


@router.get(
    "/list",
    response_model=ApiResponse[List[ReviewRead]],
    responses=_ERRORS,
    summary="List my reviews (newest first)",
)
async def list_my_reviews(current_user: dict = Depends(get_current_user)) -> Dict[str, Any]:
    return success(await ReviewService.list_reviews_by_user(current_user["user_id"]))


@router.get(
    "/list/latest/{restroom_id}",
    response_model=ApiResponse[List[ReviewRead]],
    responses=_ERRORS,
    summary="List a restroom's reviews (newest first)",
)
async def list_latest(
    restroom_id: int = Path(..., ge=1, le=MAX_ID, description="Restroom ID (integer >= 1)"),
) -> Dict[str, Any]:
    return success(await ReviewService.list_latest(restroom_id))


@router.get(
    "/list/high-rating/{restroom_id}",
    response_model=ApiResponse[List[ReviewRead]],
    responses=_ERRORS,
    summary="List a restroom's reviews (highest rating first)",
)
async def list_high_rating(
    restroom_id: int = Path(..., ge=1, le=MAX_ID, description="Restroom ID (integer >= 1)"),
) -> Dict[str, Any]:
    return success(await ReviewService.list_by_high_rating(restroom_id))


@router.get(
    "/list/low-rating/{restroom_id}",
    response_model=ApiResponse[List[ReviewRead]],
    responses=_ERRORS,
    summary="List a restroom's reviews (lowest rating first)",
)
async def list_low_rating(
    restroom_id: int = Path(..., ge=1, le=MAX_ID, description="Restroom ID (integer >= 1)"),
) -> Dict[str, Any]:
    return success(await ReviewService.list_by_low_rating(restroom_id))
