"""
Order Service
Builds orders from carts, drives the status lifecycle and answers order stats

Handles:
- Order creation from a staged cart (totals, number, owning shop)
- Status transitions (pending -> processing -> completed | cancelled)
- Stock decrement when an order completes
- Visibility: a shop actor only ever sees its own orders

Stock is validated when lines are staged in the cart, not again when the
order is committed.

Author: TM3
Date: 2026-10-19
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional, Union

from pydantic import BaseModel

from retail_pos.core.auth import AuthContext
from retail_pos.core.errors import InvalidStatusTransition, NotFound, ValidationError
from retail_pos.core.events import Subscription
from retail_pos.domain.common import Money, to_cents
from retail_pos.domain.order import Order, OrderStatus, compute_totals
from retail_pos.repositories.entity_store import Snapshot
from retail_pos.repositories.order_repository import OrderRepository
from retail_pos.services.cart_service import Cart
from retail_pos.services.pagination import Page, paginate_orders
from retail_pos.services.product_catalog_service import ProductCatalogService

logger = logging.getLogger(__name__)


class OrderStats(BaseModel):
    """Order counters and revenue for one scope"""
    total: int
    pending: int
    processing: int
    completed: int
    cancelled: int
    total_revenue: Money
    average_order_value: Money


class OrderService:
    """Order engine"""

    def __init__(self, orders: OrderRepository, catalog: ProductCatalogService, auth: AuthContext,
                 decrement_stock_on_completion: bool = True,
                 clock: Callable[[], datetime] = datetime.now):
        self.orders = orders
        self.catalog = catalog
        self.auth = auth
        self.decrement_stock_on_completion = decrement_stock_on_completion
        self.clock = clock

    def new_cart(self) -> Cart:
        return Cart(self.catalog.products)

    # =========================================================================
    # Creation and lifecycle
    # =========================================================================

    def create_order(self, cart: Cart, customer_name: str, customer_phone: str,
                     payment_method: str = "Cash", notes: str = "") -> Order:
        """
        Create a pending order for the acting shop from a staged cart

        Args:
            cart: Staged lines and discount
            customer_name: Required, non-empty
            customer_phone: Required, non-empty
            payment_method: Cash, Card, ...
            notes: Free text

        Returns:
            The order, including its generated order number. Durable
            persistence continues in the background.
        """
        session = self.auth.require_session()

        if cart.is_empty():
            raise ValidationError("Please add at least one product")
        if not (customer_name or "").strip() or not (customer_phone or "").strip():
            raise ValidationError("Please enter customer name and phone")

        lines = cart.lines
        totals = compute_totals(lines, cart.discount)

        order = self.orders.create({
            'shop_id': session.shop.id,
            'shop_name': session.shop.name,
            'items': [line.model_dump() for line in lines],
            'subtotal': totals.subtotal,
            'tax': totals.tax,
            'discount': totals.discount,
            'total': totals.total,
            'status': OrderStatus.PENDING,
            'payment_method': payment_method or "Cash",
            'customer_name': customer_name.strip(),
            'customer_phone': customer_phone.strip(),
            'notes': notes or "",
        })

        logger.info(f"Order {order.order_number} created for shop {order.shop_id} (total {order.total})")
        return order

    def update_order_status(self, order_id: int, status: Union[OrderStatus, str]) -> Order:
        """
        Apply a status transition

        Raises:
            NotFound: unknown (or not visible) order
            ValidationError: unknown status value
            InvalidStatusTransition: transition not allowed from current status
        """
        order = self.get_order(order_id)

        try:
            new_status = OrderStatus(status)
        except ValueError as e:
            raise ValidationError(f"Unknown order status: {status}") from e

        if not order.can_transition_to(new_status):
            raise InvalidStatusTransition(order.status.value, new_status.value)

        changes = {'status': new_status}
        if new_status == OrderStatus.COMPLETED:
            changes['completed_date'] = self.clock()

        updated = self.orders.update(order_id, changes)
        logger.info(f"Order {order.order_number}: {order.status.value} -> {new_status.value}")

        if new_status == OrderStatus.COMPLETED and self.decrement_stock_on_completion:
            for item in updated.items:
                self.catalog.adjust_stock(item.product_id, -item.quantity)

        return updated

    def delete_order(self, order_id: int) -> None:
        """Remove an order (administrators only)"""
        self.auth.require_admin()
        if not self.orders.delete(order_id):
            raise NotFound("Order", order_id)
        logger.info(f"Order {order_id} deleted")

    # =========================================================================
    # Visibility-gated reads
    # =========================================================================

    def list_orders(self) -> List[Order]:
        shop_id = self.auth.visible_shop_id()
        if shop_id is None:
            return self.orders.snapshot
        return self.orders.find_by_shop(shop_id)

    def get_order(self, order_id: int) -> Order:
        shop_id = self.auth.visible_shop_id()
        order = self.orders.find_by_id(order_id)
        if not order or (shop_id is not None and order.shop_id != shop_id):
            raise NotFound("Order", order_id)
        return order

    def watch_orders(self, listener: Callable[[Snapshot], None]) -> Subscription:
        """Subscribe to the orders visible to the acting session"""
        shop_id = self.auth.visible_shop_id()
        if shop_id is None:
            return self.orders.subscribe(listener)
        return self.orders.subscribe_for_shop(shop_id, listener)

    def page(self, search_term: str = "", status: Optional[str] = None, page: int = 1,
             page_size: int = 10) -> Page[Order]:
        return paginate_orders(self.list_orders(), search_term, status, page, page_size)

    def recent_orders(self, limit: int = 5) -> List[Order]:
        orders = sorted(self.list_orders(), key=lambda o: o.created_date, reverse=True)
        return orders[:limit]

    # =========================================================================
    # Statistics (pure reads over the in-memory collection)
    # =========================================================================

    def _scoped(self, shop_id: Optional[int] = None) -> List[Order]:
        visible = self.auth.visible_shop_id()
        # A shop actor is always limited to its own orders
        if visible is not None:
            shop_id = visible
        if shop_id is None:
            return self.orders.snapshot
        return self.orders.find_by_shop(shop_id)

    def total_orders(self, shop_id: Optional[int] = None) -> int:
        return len(self._scoped(shop_id))

    def count_by_status(self, status: Union[OrderStatus, str], shop_id: Optional[int] = None) -> int:
        return sum(1 for o in self._scoped(shop_id) if o.status == status)

    def total_revenue(self, shop_id: Optional[int] = None) -> Decimal:
        """Sum of totals over completed orders"""
        return sum(
            (o.total for o in self._scoped(shop_id) if o.status == OrderStatus.COMPLETED),
            Decimal("0"),
        )

    def average_order_value(self, shop_id: Optional[int] = None) -> Decimal:
        completed = self.count_by_status(OrderStatus.COMPLETED, shop_id)
        if completed == 0:
            return Decimal("0")
        return to_cents(self.total_revenue(shop_id) / completed)

    def order_stats(self, shop_id: Optional[int] = None) -> OrderStats:
        return OrderStats(
            total=self.total_orders(shop_id),
            pending=self.count_by_status(OrderStatus.PENDING, shop_id),
            processing=self.count_by_status(OrderStatus.PROCESSING, shop_id),
            completed=self.count_by_status(OrderStatus.COMPLETED, shop_id),
            cancelled=self.count_by_status(OrderStatus.CANCELLED, shop_id),
            total_revenue=self.total_revenue(shop_id),
            average_order_value=self.average_order_value(shop_id),
        )
