from typing import Optional

from pydantic import BaseModel, Field


class RestroomCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, examples=["Seoul Station 1F"])
    address: Optional[str] = Field(None, examples=["405 Hangang-daero, Yongsan-gu, Seoul"])
    latitude: Optional[float] = Field(None, ge=-90, le=90, examples=[37.5547])
    longitude: Optional[float] = Field(None, ge=-180, le=180, examples=[126.9707])


class RestroomRead(BaseModel):
    restroom_id: int
    name: str
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    average_rating: float = Field(0.0, description="Mean rating of active reviews, 0 when none")
