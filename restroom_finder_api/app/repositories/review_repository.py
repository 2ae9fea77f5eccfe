import sqlite3
from typing import List, Optional

from ..models.review import Review

_SELECT = (
    "SELECT r.id, r.user_id, r.restroom_id, r.review_content, r.rating, r.status, "
    "r.created_at, r.updated_at, u.nickname "
    "FROM reviews r JOIN users u ON u.id = r.user_id"
)


class ReviewRepository:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_by_id(self, review_id: int) -> Optional[Review]:
        row = self.conn.execute(f"{_SELECT} WHERE r.id = ?", (review_id,)).fetchone()
        return Review.from_row(row) if row else None

    def find_all_by_restroom(self, restroom_id: int) -> List[Review]:
        """Active reviews of a restroom, oldest first."""
        rows = self.conn.execute(
            f"{_SELECT} WHERE r.restroom_id = ? AND r.status = 1 ORDER BY r.id",
            (restroom_id,),
        ).fetchall()
        return [Review.from_row(row) for row in rows]

    def find_all_by_user(self, user_id: int) -> List[Review]:
        """Active reviews written by a user, oldest first."""
        rows = self.conn.execute(
            f"{_SELECT} WHERE r.user_id = ? AND r.status = 1 ORDER BY r.id",
            (user_id,),
        ).fetchall()
        return [Review.from_row(row) for row in rows]

    def save(self, user_id: int, restroom_id: int, review_content: str, rating: int) -> Review:
        cursor = self.conn.execute(
            "INSERT INTO reviews (user_id, restroom_id, review_content, rating) VALUES (?, ?, ?, ?)",
            (user_id, restroom_id, review_content, rating),
        )
        return self.find_by_id(cursor.lastrowid)

    def update(self, review_id: int, review_content: str, rating: int) -> Review:
        self.conn.execute(
            "UPDATE reviews SET review_content = ?, rating = ?, updated_at = CURRENT_TIMESTAMP "
            "WHERE id = ?",
            (review_content, rating, review_id),
        )
        return self.find_by_id(review_id)

    def delete_by_id(self, review_id: int) -> None:
        self.conn.execute("DELETE FROM reviews WHERE id = ?", (review_id,))
