"""Envelope models used as ``response_model`` on every route."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    code: str = Field("00", examples=["00"])
    msg: str = Field("success", examples=["success"])
    data: Optional[T] = None


class ErrorDetail(BaseModel):
    status: str = Field(..., examples=["REVIEW_NOT_FOUND"])
    msg: str = Field(..., examples=["Review 3 not found"])


class ErrorResponse(BaseModel):
    code: str = Field(..., examples=["16"])
    msg: str = Field("fail", examples=["fail"])
    data: ErrorDetail
