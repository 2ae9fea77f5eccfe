"""
Pydantic models for accounts and point balances.

Point changes are reported as ``PointChange``: the user and the number
of points added or spent by the operation.
"""

import re

from pydantic import BaseModel, Field, field_validator

from ..core.db import MAX_ID

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserLogin(BaseModel):
    email: str = Field(..., examples=["user@example.com"])
    password: str = Field(..., min_length=1)


class UserSignup(UserLogin):
    nickname: str = Field(..., min_length=1, max_length=30, examples=["flushfinder"])
    password: str = Field(..., min_length=8, examples=["strongpassword"])

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not _EMAIL_RE.match(v):
            raise ValueError("Invalid email address")
        return v


class TokenRead(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int


class UserRead(BaseModel):
    user_id: int
    email: str
    nickname: str
    point: int


class PointUse(BaseModel):
    point: int = Field(..., ge=1, le=MAX_ID, description="Points to spend", examples=[500])


class PointChange(BaseModel):
    user_id: int
    point: int
