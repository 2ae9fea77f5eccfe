"""
In-app purchase flow.

The client sends the product id and the purchase token it received from
Google Play.  The token is checked against the store; a confirmed
purchase adds the product's points to the user and is recorded as an
order, both in one transaction.  A token can only be redeemed once.
"""

import logging

from ..core.db import transaction
from ..core.exceptions import DuplicatePurchaseError
from ..models.product import Product
from ..schemas.purchase import GoogleInAppPurchaseRequest
from ..schemas.user import PointChange
from .order_service import OrderService
from .receipt_validation_service import ReceiptValidationService
from .user_service import UserService

logger = logging.getLogger(__name__)


class InAppPurchaseService:
    @classmethod
    async def verify_purchase(cls, user_id: int, request: GoogleInAppPurchaseRequest) -> PointChange:
        """Redeem a Google Play purchase.

        Returns the points charged, or ``point=0`` when the store does
        not confirm the receipt (nothing is persisted in that case).

        Raises
        ------
        ProductNotFoundError
            The product id is not in the catalogue.
        DuplicatePurchaseError
            The token was redeemed before.
        ExternalServiceError
            The store could not be reached.
        """
        point = Product.points_from_product_id(request.product_id)

        with transaction() as conn:
            if OrderService.token_used(conn, request.token):
                raise DuplicatePurchaseError()

        if not ReceiptValidationService.validate_receipt(request):
            logger.warning("Receipt for product %s by user %s was not confirmed", request.product_id, user_id)
            return PointChange(user_id=user_id, point=0)

        with transaction() as conn:
            # Re-checked here: the token may have been redeemed while the store was queried.
            if OrderService.token_used(conn, request.token):
                raise DuplicatePurchaseError()
            change = UserService.apply_point_charge(conn, user_id, point)
            OrderService.create_order(conn, request.token, user_id, request.product_id, point)
        logger.info("User %s bought %s (%s points)", user_id, request.product_id, point)
        return change
