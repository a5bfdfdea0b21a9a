"""
Order Repository - reactive store for orders

Assigns order numbers (ORD-<year>-<id:04d>) and creation timestamps.

Author: TM3
Date: 2026-10-19
"""
from typing import Any, Callable, Dict, List

from retail_pos.core.config import ORDER_NUMBER_FORMAT
from retail_pos.core.data_service import ORDERS
from retail_pos.core.events import Subscription
from retail_pos.domain.order import Order
from retail_pos.repositories.entity_store import EntityStore, Snapshot


def format_order_number(year: int, order_id: int) -> str:
    return ORDER_NUMBER_FORMAT.format(year=year, id=order_id)


class OrderRepository(EntityStore[Order]):
    """Store for Order entities"""

    collection = ORDERS
    model = Order
    entity_name = "Order"

    def find_by_shop(self, shop_id: int) -> List[Order]:
        """Orders owned by one shop"""
        return [order for order in self._items if order.shop_id == shop_id]

    def subscribe_for_shop(self, shop_id: int, listener: Callable[[Snapshot], None]) -> Subscription:
        """Like subscribe(), but every snapshot only holds the shop's orders"""
        return self.subscribe(
            lambda orders: listener(tuple(order for order in orders if order.shop_id == shop_id))
        )

    def _prepare_new(self, data: Dict[str, Any], new_id: int) -> Dict[str, Any]:
        now = self.clock()
        data = super()._prepare_new(data, new_id)
        data['order_number'] = format_order_number(now.year, new_id)
        data['created_date'] = now
        return data
