"""
Cart Builder
Stages order lines before an order is created

Lines are keyed by product id: adding a product that is already staged sums
the quantities into the existing line. Stock is checked against the current
catalog snapshot for the cumulative staged quantity. Nothing is persisted.

Author: TM3
Date: 2026-10-19
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from retail_pos.core.errors import InsufficientStock, NotFound, ValidationError
from retail_pos.domain.common import to_cents
from retail_pos.domain.order import OrderItem, OrderTotals, compute_totals
from retail_pos.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class Cart:
    """Ordered list of staged order lines with running totals"""

    def __init__(self, products: ProductRepository):
        self.products = products
        self._lines: List[OrderItem] = []
        self._discount = Decimal("0")
        self.totals: OrderTotals = compute_totals([])

    @property
    def lines(self) -> List[OrderItem]:
        return list(self._lines)

    @property
    def discount(self) -> Decimal:
        return self._discount

    @property
    def subtotal(self) -> Decimal:
        return self.totals.subtotal

    @property
    def tax(self) -> Decimal:
        return self.totals.tax

    @property
    def total(self) -> Decimal:
        return self.totals.total

    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def add_line(self, product_id: Optional[int], quantity: int) -> OrderItem:
        """
        Stage quantity units of a product

        Raises:
            ValidationError: quantity <= 0 or product_id missing
            NotFound: product does not resolve to an active catalog product
            InsufficientStock: stock is below the cumulative staged quantity
        """
        if product_id is None:
            raise ValidationError("Please select a product")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError("Quantity must be a positive whole number")

        product = self.products.find_by_id(product_id)
        if not product or not product.is_active:
            raise NotFound("Product", product_id)

        index = self._index_of(product_id)
        staged = self._lines[index].quantity if index is not None else 0
        requested = staged + quantity
        if product.stock < requested:
            raise InsufficientStock(product.name, product.stock, requested)

        if index is not None:
            existing = self._lines[index]
            line = OrderItem(
                product_id=existing.product_id,
                product_name=existing.product_name,
                quantity=requested,
                price=existing.price,
                total=requested * existing.price,
            )
            self._lines[index] = line
        else:
            line = OrderItem(
                product_id=product.id,
                product_name=product.name,
                quantity=quantity,
                price=product.price,
                total=quantity * product.price,
            )
            self._lines.append(line)

        self._recalculate()
        logger.debug(f"{product.name} added to cart (qty now {line.quantity})")
        return line

    def remove_line(self, index: int) -> Optional[OrderItem]:
        """Remove the line at index; an out-of-range index is ignored"""
        if not isinstance(index, int) or index < 0 or index >= len(self._lines):
            return None
        removed = self._lines.pop(index)
        self._recalculate()
        return removed

    def set_discount(self, amount) -> None:
        try:
            discount = to_cents(Decimal(str(amount)))
        except InvalidOperation as e:
            raise ValidationError(f"Invalid discount: {amount}") from e
        if not discount.is_finite() or discount < 0:
            raise ValidationError("Discount cannot be negative")
        self._discount = discount
        self._recalculate()

    def clear(self) -> None:
        self._lines = []
        self._discount = Decimal("0")
        self._recalculate()

    def _index_of(self, product_id: int) -> Optional[int]:
        for index, line in enumerate(self._lines):
            if line.product_id == product_id:
                return index
        return None

    def _recalculate(self) -> None:
        self.totals = compute_totals(self._lines, self._discount)
