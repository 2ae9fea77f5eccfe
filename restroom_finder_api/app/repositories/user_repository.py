import sqlite3
from typing import Optional

from ..models.user import User

_COLUMNS = "id, email, nickname, password, role_id, point, disabled, created_at, updated_at"


class UserRepository:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def find_by_id(self, user_id: int) -> Optional[User]:
        row = self.conn.execute(f"SELECT {_COLUMNS} FROM users WHERE id = ?", (user_id,)).fetchone()
        return User.from_row(row) if row else None

    def find_by_email(self, email: str) -> Optional[User]:
        row = self.conn.execute(f"SELECT {_COLUMNS} FROM users WHERE email = ?", (email,)).fetchone()
        return User.from_row(row) if row else None

    def save(self, email: str, nickname: str, password: Optional[str], role_id: int) -> User:
        cursor = self.conn.execute(
            "INSERT INTO users (email, nickname, password, role_id) VALUES (?, ?, ?, ?)",
            (email, nickname, password, role_id),
        )
        return self.find_by_id(cursor.lastrowid)

    def add_point(self, user_id: int, point: int) -> None:
        self.conn.execute(
            "UPDATE users SET point = point + ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            (point, user_id),
        )

    def subtract_point(self, user_id: int, point: int) -> bool:
        """Take ``point`` off the balance in one statement.

        Returns ``False`` and changes nothing when the balance is lower
        than ``point``.
        """
        cursor = self.conn.execute(
            "UPDATE users SET point = point - ?, updated_at = CURRENT_TIMESTAMP "
            "WHERE id = ? AND point >= ?",
            (point, user_id, point),
        )
        return cursor.rowcount == 1
