from typing import Optional

from pydantic import BaseModel


class SearchRead(BaseModel):
    """One stored address-search result."""

    search_id: int
    search_word: str
    name: Optional[str] = None
    road_address: Optional[str] = None
    lot_address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    clicked: bool = False
