import sqlite3
from typing import List, Optional

from ..models.order import Order

_COLUMNS = "id, user_id, purchase_token, product_id, point, created_at"


class OrderRepository:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_by_token(self, purchase_token: str) -> Optional[Order]:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM orders WHERE purchase_token = ?", (purchase_token,)
        ).fetchone()
        return Order.from_row(row) if row else None

    def find_all_by_user(self, user_id: int) -> List[Order]:
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM orders WHERE user_id = ? ORDER BY id", (user_id,)
        ).fetchall()
        return [Order.from_row(row) for row in rows]

    def save(self, user_id: int, purchase_token: str, product_id: str, point: int) -> Order:
        cursor = self.conn.execute(
            "INSERT INTO orders (user_id, purchase_token, product_id, point) VALUES (?, ?, ?, ?)",
            (user_id, purchase_token, product_id, point),
        )
        row = self.conn.execute(f"SELECT {_COLUMNS} FROM orders WHERE id = ?", (cursor.lastrowid,)).fetchone()
        return Order.from_row(row)
