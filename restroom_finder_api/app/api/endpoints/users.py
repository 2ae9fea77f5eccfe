"""
User endpoints: sign-up, login, profile and point use.

Sign-up and login return a bearer token to send as
``Authorization: Bearer <token>`` on authenticated routes.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from restroom_finder_api.app.core.responses import success
from restroom_finder_api.app.core.security import get_current_user
from restroom_finder_api.app.schemas.common import ApiResponse, ErrorResponse
from restroom_finder_api.app.schemas.user import PointChange, PointUse, TokenRead, UserLogin, UserRead, UserSignup
from restroom_finder_api.app.services.user_service import UserService

router = APIRouter()


@router.post(
    "/signup",
    response_model=ApiResponse[TokenRead],
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Register a user",
)
async def signup(data: UserSignup) -> Dict[str, Any]:
    return success(await UserService.signup(data))


@router.post(
    "/login",
    response_model=ApiResponse[TokenRead],
    responses={401: {"model": ErrorResponse}},
    summary="Log in and receive a token",
)
async def login(data: UserLogin) -> Dict[str, Any]:
    return success(await UserService.login(data))


@router.get("/me", response_model=ApiResponse[UserRead], summary="Current user and point balance")
async def get_me(current_user: dict = Depends(get_current_user)) -> Dict[str, Any]:
    return success(await UserService.get_me(current_user["user_id"]))


@router.post(
    "/points/use",
    response_model=ApiResponse[PointChange],
    responses={400: {"model": ErrorResponse}},
    summary="Spend points",
)
async def use_points(data: PointUse, current_user: dict = Depends(get_current_user)) -> Dict[str, Any]:
    return success(await UserService.use_points(current_user["user_id"], data.point))
