"""Restroom endpoints.  Reading is public; registering needs the admin role."""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Path

from restroom_finder_api.app.core.db import MAX_ID, ROLE_ADMIN
from restroom_finder_api.app.core.responses import success
from restroom_finder_api.app.core.security import require_roles
from restroom_finder_api.app.schemas.common import ApiResponse, ErrorResponse
from restroom_finder_api.app.schemas.restroom import RestroomCreate, RestroomRead
from restroom_finder_api.app.services.restroom_service import RestroomService

router = APIRouter()


@router.get(
    "/{restroom_id}",
    response_model=ApiResponse[RestroomRead],
    responses={404: {"model": ErrorResponse}},
    summary="Get a restroom with its average rating",
)
async def get_restroom(
    restroom_id: int = Path(..., ge=1, le=MAX_ID, description="Restroom ID (integer >= 1)"),
) -> Dict[str, Any]:
    return success(await RestroomService.get_restroom(restroom_id))


@router.post(
    "",
    response_model=ApiResponse[RestroomRead],
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
    summary="Register a restroom",
)
async def create_restroom(
    data: RestroomCreate,
    current_user: dict = Depends(require_roles(ROLE_ADMIN)),
) -> Dict[str, Any]:
    return success(await RestroomService.create_restroom(data))
