import sqlite3
from dataclasses import dataclass
from typing import Optional


@dataclass
class Review:
    """A rating (0-5) plus text left by one user for one restroom."""

    id: int
    user_id: int
    restroom_id: int
    review_content: str
    rating: int
    active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    # Author nickname, filled when the query joins ``users``.
    nickname: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Review":
        keys = row.keys()
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            restroom_id=row["restroom_id"],
            review_content=row["review_content"],
            rating=int(row["rating"]),
            active=bool(row["status"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            nickname=row["nickname"] if "nickname" in keys else None,
        )
