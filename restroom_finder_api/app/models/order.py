import sqlite3
from dataclasses import dataclass
from typing import Optional


@dataclass
class Order:
    id: int
    user_id: int
    purchase_token: str
    product_id: str
    point: int
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Order":
        return cls(
            id=row["id"],
            user_id=row["user_id"],
            purchase_token=row["purchase_token"],
            product_id=row["product_id"],
            point=row["point"],
            created_at=row["created_at"],
        )
