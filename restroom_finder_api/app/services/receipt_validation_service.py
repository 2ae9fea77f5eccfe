"""
Receipt validation against Google Play.

Purchases made in the Android app are confirmed with the Android
Publisher API (``purchases.products.get``).  A receipt is valid when the
API knows the token and reports ``purchaseState == 0`` (purchased).
"""

import logging
from urllib.parse import quote

import httpx

from ..core.config import settings
from ..core.exceptions import ExternalServiceError
from ..schemas.purchase import GoogleInAppPurchaseRequest

logger = logging.getLogger(__name__)

PURCHASED = 0


class ReceiptValidationService:
    @classmethod
    def validate_receipt(cls, request: GoogleInAppPurchaseRequest) -> bool:
        """Return ``True`` when Google Play confirms the purchase.

        Tokens Google rejects (HTTP 4xx) are reported as invalid.
        Missing credentials, network errors and 5xx responses raise
        ``ExternalServiceError``.
        """
        if not settings.google_play_access_token:
            raise ExternalServiceError("Receipt validation is not configured")
        url = (
            f"{settings.google_play_api_url.rstrip('/')}/applications/"
            f"{quote(settings.google_play_package_name, safe='')}/purchases/products/"
            f"{quote(request.product_id, safe='')}/tokens/{quote(request.token, safe='')}"
        )
        headers = {"Authorization": f"Bearer {settings.google_play_access_token}"}
        try:
            response = httpx.get(url, headers=headers, timeout=settings.external_timeout)
        except httpx.HTTPError as e:
            logger.error("Receipt validation request failed: %s", e)
            raise ExternalServiceError("Receipt validation service is unavailable") from e

        if response.status_code >= 500:
            logger.error("Receipt validation returned HTTP %s", response.status_code)
            raise ExternalServiceError("Receipt validation service is unavailable")
        if response.status_code >= 400:
            logger.warning(
                "Google Play rejected token for product %s: HTTP %s", request.product_id, response.status_code
            )
            return False
        try:
            data = response.json()
        except ValueError as e:
            raise ExternalServiceError("Receipt validation service returned an unexpected response") from e
        return isinstance(data, dict) and data.get("purchaseState") == PURCHASED
