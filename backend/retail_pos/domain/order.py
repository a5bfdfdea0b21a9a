"""
Order Domain Models

Orders embed their line items together with a name/price snapshot taken when
the line was added, so later catalog edits never change historical orders.

Author: TM3
Date: 2026-10-19
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field

from retail_pos.core.config import TAX_RATE
from retail_pos.domain.common import DomainModel, Money, to_cents


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Allowed status changes; completed and cancelled are terminal
STATUS_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({
        OrderStatus.PROCESSING, OrderStatus.COMPLETED, OrderStatus.CANCELLED
    }),
    OrderStatus.PROCESSING: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


class OrderItem(DomainModel):
    """
    Order line - one product, quantity and price snapshot

    Fields:
        product_id: Catalog product ID (weak reference)
        product_name: Product name at the time the line was added
        quantity: Units ordered
        price: Unit price at the time the line was added
        total: quantity * price
    """

    product_id: int = Field(..., description="Catalog product ID")
    product_name: str = Field(..., description="Product name at order time")
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    price: Money = Field(..., ge=0, description="Unit price snapshot")
    total: Money = Field(..., ge=0, description="Line total")


class OrderTotals(BaseModel):
    """Monetary summary of a set of lines"""
    subtotal: Decimal
    tax: Decimal
    discount: Decimal
    total: Decimal


def compute_totals(items: List[OrderItem], discount: Decimal = Decimal("0")) -> OrderTotals:
    """subtotal = sum of line totals, tax = subtotal * TAX_RATE, total = subtotal + tax - discount"""
    subtotal = to_cents(sum((item.quantity * item.price for item in items), Decimal("0")))
    tax = to_cents(subtotal * TAX_RATE)
    discount = to_cents(discount)
    return OrderTotals(
        subtotal=subtotal,
        tax=tax,
        discount=discount,
        total=subtotal + tax - discount,
    )


class Order(DomainModel):
    """
    Order domain model

    Fields:
        id: Internal order ID
        order_number: Human-readable number, ORD-<year>-<id:04d>
        shop_id: Owning shop (weak reference)
        shop_name: Shop name at creation time
        items: Embedded order lines
        subtotal, tax, discount, total: Monetary totals fixed at creation
        status: pending, processing, completed or cancelled
        payment_method: Cash, Card, ...
        customer_name, customer_phone: Walk-in customer details
        notes: Free-text notes
        created_date: Creation timestamp
        completed_date: Set when the order reaches completed
    """

    id: int = Field(..., description="Internal order ID")
    order_number: str = Field(..., description="Order number")
    shop_id: int = Field(..., description="Owning shop ID")
    shop_name: str = Field("", description="Shop name at order time")
    items: List[OrderItem] = Field(default_factory=list, description="Order lines")

    subtotal: Money = Field(..., ge=0, description="Sum of line totals")
    tax: Money = Field(Decimal("0"), ge=0, description="Tax amount")
    discount: Money = Field(Decimal("0"), ge=0, description="Discount amount")
    total: Money = Field(..., description="subtotal + tax - discount")

    status: OrderStatus = Field(OrderStatus.PENDING, description="Order status")
    payment_method: str = Field("Cash", description="Payment method")
    customer_name: str = Field(..., description="Customer name")
    customer_phone: str = Field(..., description="Customer phone")
    notes: str = Field("", description="Order notes")

    created_date: datetime = Field(..., description="Creation timestamp")
    completed_date: Optional[datetime] = Field(None, description="Completion timestamp")

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_terminal(self) -> bool:
        return not STATUS_TRANSITIONS[self.status]

    def can_transition_to(self, status: OrderStatus) -> bool:
        return status in STATUS_TRANSITIONS[self.status]

    def to_dict(self) -> dict:
        """Record plus computed fields, for API responses"""
        data = self.to_record()
        data['itemCount'] = self.item_count
        data['totalQuantity'] = self.total_quantity
        return data
