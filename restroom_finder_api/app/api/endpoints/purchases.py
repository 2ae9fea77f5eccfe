"""
In-app purchase endpoints.

``POST /google`` redeems a Google Play purchase token for points.  The
response carries the number of points added, which is 0 when the store
does not confirm the receipt.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from restroom_finder_api.app.core.responses import success
from restroom_finder_api.app.core.security import get_current_user
from restroom_finder_api.app.schemas.common import ApiResponse, ErrorResponse
from restroom_finder_api.app.schemas.purchase import GoogleInAppPurchaseRequest, OrderRead
from restroom_finder_api.app.schemas.user import PointChange
from restroom_finder_api.app.services.in_app_purchase_service import InAppPurchaseService
from restroom_finder_api.app.services.order_service import OrderService

router = APIRouter()


@router.post(
    "/google",
    response_model=ApiResponse[PointChange],
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Verify a Google Play purchase and charge points",
)
async def verify_google_purchase(
    request: GoogleInAppPurchaseRequest,
    current_user: dict = Depends(get_current_user),
) -> Dict[str, Any]:
    return success(await InAppPurchaseService.verify_purchase(current_user["user_id"], request))


@router.get("/orders", response_model=ApiResponse[List[OrderRead]], summary="List my orders")
async def list_orders(current_user: dict = Depends(get_current_user)) -> Dict[str, Any]:
    return success(await OrderService.list_orders(current_user["user_id"]))
