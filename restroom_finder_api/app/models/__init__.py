"""
Entity records.

Plain dataclasses mirroring the database tables.  Repositories build
them from ``sqlite3.Row`` objects via ``from_row``; services work on
them and map them to response schemas.
"""

from .order import Order
from .product import Product
from .restroom import Restroom
from .review import Review
from .search import Search
from .user import User

__all__ = ["Order", "Product", "Restroom", "Review", "Search", "User"]
