"""In-app products sold through the store and the points each one grants."""

from enum import Enum

from ..core.exceptions import ProductNotFoundError


class Product(Enum):
    POINT_1000 = ("point_1000", 1000)
    POINT_3000 = ("point_3000", 3000)
    POINT_5000 = ("point_5000", 5000)
    POINT_10000 = ("point_10000", 10000)

    def __init__(self, product_id: str, points: int) -> None:
        self.product_id = product_id
        self.points = points

    @classmethod
    def from_product_id(cls, product_id: str) -> "Product":
        for product in cls:
            if product.product_id == product_id:
                return product
        raise ProductNotFoundError(f"Unknown product: {product_id}")

    @classmethod
    def points_from_product_id(cls, product_id: str) -> int:
        return cls.from_product_id(product_id).points
