"""
Pydantic schemas for restroom reviews.

A review carries free text and a 0-5 star rating.  Content is trimmed
and must not be blank; the service HTML-escapes it on the way out.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..core.db import MAX_ID

MAX_CONTENT_LENGTH = 1000


def _clean_content(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Review content must not be blank")
    if len(value) > MAX_CONTENT_LENGTH:
        raise ValueError(f"Review content must be {MAX_CONTENT_LENGTH} characters or fewer")
    return value


class ReviewUpdate(BaseModel):
    """Payload for editing an existing review."""

    review_content: str = Field(..., examples=["Clean and well lit"])
    rating: int = Field(..., ge=0, le=5, description="Rating from 0 to 5", examples=[4])

    @field_validator("review_content")
    @classmethod
    def sanitize_content(cls, v: str) -> str:
        return _clean_content(v)


class ReviewCreate(ReviewUpdate):
    """Payload for submitting a review."""

    restroom_id: int = Field(..., ge=1, le=MAX_ID, description="Identifier of the reviewed restroom", examples=[1])


class ReviewRead(BaseModel):
    review_id: int
    user_id: int
    nickname: Optional[str] = None
    restroom_id: int
    review_content: str
    rating: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
