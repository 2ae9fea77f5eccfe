import sqlite3
from typing import Optional

from ..models.restroom import Restroom

_COLUMNS = "id, name, address, latitude, longitude, average_rating, status, created_at, updated_at"


class RestroomRepository:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_by_id(self, restroom_id: int) -> Optional[Restroom]:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM restrooms WHERE id = ?", (restroom_id,)
        ).fetchone()
        return Restroom.from_row(row) if row else None

    def save(
        self,
        name: str,
        address: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> Restroom:
        cursor = self.conn.execute(
            "INSERT INTO restrooms (name, address, latitude, longitude) VALUES (?, ?, ?, ?)",
            (name, address, latitude, longitude),
        )
        return self.find_by_id(cursor.lastrowid)

    def update_average_rating(self, restroom_id: int, average_rating: float) -> None:
        self.conn.execute(
            "UPDATE restrooms SET average_rating = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            (average_rating, restroom_id),
        )
