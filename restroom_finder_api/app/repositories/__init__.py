"""
Repository layer.

Each repository wraps one table and is bound to the connection of the
caller's transaction, so several repositories used inside one
``transaction()`` block commit or roll back together::

    with transaction() as conn:
        restroom = RestroomRepository(conn).find_by_id(restroom_id)
        reviews = ReviewRepository(conn).find_all_by_restroom(restroom_id)

Repositories never commit; list queries return rows in insertion order.
"""

from .order_repository import OrderRepository
from .restroom_repository import RestroomRepository
from .review_repository import ReviewRepository
from .search_repository import SearchRepository
from .user_repository import UserRepository

__all__ = [
    "OrderRepository",
    "RestroomRepository",
    "ReviewRepository",
    "SearchRepository",
    "UserRepository",
]
