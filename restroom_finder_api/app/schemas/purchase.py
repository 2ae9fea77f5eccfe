from typing import Optional

from pydantic import BaseModel, Field


class GoogleInAppPurchaseRequest(BaseModel):
    """Receipt data the Android client receives from Google Play billing."""

    product_id: str = Field(..., min_length=1, examples=["point_1000"])
    token: str = Field(..., min_length=1, description="Google Play purchase token")


class OrderRead(BaseModel):
    order_id: int
    product_id: str
    point: int
    created_at: Optional[str] = None
