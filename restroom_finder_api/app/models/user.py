import sqlite3
from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    id: int
    email: str
    nickname: str
    role_id: int
    point: int = 0
    password: Optional[str] = None
    disabled: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "User":
        return cls(
            id=row["id"],
            email=row["email"],
            nickname=row["nickname"],
            role_id=row["role_id"],
            point=row["point"],
            password=row["password"],
            disabled=bool(row["disabled"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
