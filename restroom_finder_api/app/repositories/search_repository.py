import sqlite3
from typing import Optional

from ..models.search import Search

_COLUMNS = (
    "id, user_id, search_word, name, road_address, lot_address, latitude, longitude, "
    "clicked, created_at, updated_at"
)


class SearchRepository:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_by_id(self, search_id: int) -> Optional[Search]:
        row = self.conn.execute(f"SELECT {_COLUMNS} FROM searches WHERE id = ?", (search_id,)).fetchone()
        return Search.from_row(row) if row else None

    def find_latest_clicked_by_user(self, user_id: int) -> Optional[Search]:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM searches WHERE user_id = ? AND clicked = 1 "
            "ORDER BY click_seq DESC, id DESC LIMIT 1",
            (user_id,),
        ).fetchone()
        return Search.from_row(row) if row else None

    def save(
        self,
        user_id: int,
        search_word: str,
        name: Optional[str],
        road_address: Optional[str],
        lot_address: Optional[str],
        latitude: Optional[float],
        longitude: Optional[float],
    ) -> Search:
        cursor = self.conn.execute(
            """
            INSERT INTO searches (user_id, search_word, name, road_address, lot_address, latitude, longitude)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (user_id, search_word, name, road_address, lot_address, latitude, longitude),
        )
        return self.find_by_id(cursor.lastrowid)

    def mark_clicked(self, search_id: int) -> None:
        # click_seq grows per user so re-clicks within one second stay ordered
        self.conn.execute(
            """
            UPDATE searches
            SET clicked = 1,
                click_seq = (SELECT COALESCE(MAX(s.click_seq), 0) + 1 FROM searches s
                             WHERE s.user_id = searches.user_id),
                updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            (search_id,),
        )
