"""Order records for completed in-app purchases."""

import logging
import sqlite3
from typing import List

from ..core.db import transaction
from ..models.order import Order
from ..repositories.order_repository import OrderRepository
from ..schemas.purchase import OrderRead

logger = logging.getLogger(__name__)


def to_order_read(order: Order) -> OrderRead:
    return OrderRead(order_id=order.id, product_id=order.product_id, point=order.point, created_at=order.created_at)


class OrderService:
    @staticmethod
    def create_order(conn: sqlite3.Connection, token: str, user_id: int, product_id: str, point: int) -> Order:
        """Record a purchase within the caller's transaction."""
        order = OrderRepository(conn).save(user_id=user_id, purchase_token=token, product_id=product_id, point=point)
        logger.info("Created order %s for user %s (%s, %s points)", order.id, user_id, product_id, point)
        return order

    @staticmethod
    def token_used(conn: sqlite3.Connection, token: str) -> bool:
        return OrderRepository(conn).find_by_token(token) is not None

    @classmethod
    async def list_orders(cls, user_id: int) -> List[OrderRead]:
        """The user's orders, newest first."""
        with transaction() as conn:
            orders = OrderRepository(conn).find_all_by_user(user_id)
        return [to_order_read(order) for order in reversed(orders)]
