import sqlite3
from dataclasses import dataclass
from typing import Optional


@dataclass
class Restroom:
    """A physical location reviews attach to.

    ``average_rating`` is derived data: the mean rating of the active
    reviews pointing at this restroom, or 0 when there are none.
    """

    id: int
    name: str
    address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    average_rating: float = 0.0
    active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Restroom":
        return cls(
            id=row["id"],
            name=row["name"],
            address=row["address"],
            latitude=row["latitude"],
            longitude=row["longitude"],
            average_rating=float(row["average_rating"] or 0),
            active=bool(row["status"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
