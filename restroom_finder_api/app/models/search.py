import sqlite3
from dataclasses import dataclass
from typing import Optional


@dataclass
class Search:
    """One address-search result remembered for a user.

    ``clicked`` turns true once the user picks the result; the most
    recently clicked row is the user's "recent search".
    """

    id: int
    user_id: int
    search_word: str
    name: Optional[str] = None
    road_address: Optional[str] = None
    lot_address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    clicked: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Search":
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            search_word=row["search_word"],
            name=row["name"],
            road_address=row["road_address"],
            lot_address=row["lot_address"],
            latitude=row["latitude"],
            longitude=row["longitude"],
            clicked=bool(row["clicked"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
