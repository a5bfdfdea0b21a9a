"""
Unit tests for the cart builder

Author: TM3
Date: 2026-10-19
"""
from decimal import Decimal

import pytest

from retail_pos.core.errors import InsufficientStock, NotFound, ValidationError


@pytest.fixture
def cart(pos):
    return pos.order_service.new_cart()


class TestAddLine:
    """Staging products"""

    def test_stock_is_checked_against_cumulative_quantity(self, cart):
        # Arrange: Widget has stock 5, price 10
        line = cart.add_line(1, 3)
        assert line.total == Decimal("30.00")

        # Act / Assert: 3 + 3 exceeds stock 5
        with pytest.raises(InsufficientStock) as exc_info:
            cart.add_line(1, 3)

        assert exc_info.value.available == 5
        assert exc_info.value.requested == 6
        assert cart.lines[0].quantity == 3
        assert len(cart) == 1

    def test_same_product_merges_into_one_line(self, cart):
        cart.add_line(1, 2)
        merged = cart.add_line(1, 1)

        assert len(cart) == 1
        assert merged.quantity == 3
        assert merged.total == Decimal("30.00")

    def test_price_snapshot_survives_catalog_change(self, admin_pos):
        cart = admin_pos.order_service.new_cart()
        cart.add_line(2, 1)
        admin_pos.catalog.update_product(2, {"price": Decimal("99")})

        line = cart.add_line(2, 1)

        assert line.price == Decimal("25.00")
        assert line.total == Decimal("50.00")

    def test_unknown_product(self, cart):
        with pytest.raises(NotFound):
            cart.add_line(99, 1)

    def test_inactive_product(self, cart):
        with pytest.raises(NotFound):
            cart.add_line(4, 1)

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
    def test_invalid_quantity(self, cart, quantity):
        with pytest.raises(ValidationError):
            cart.add_line(1, quantity)
        assert cart.is_empty()

    def test_missing_product(self, cart):
        with pytest.raises(ValidationError):
            cart.add_line(None, 1)


class TestTotals:
    """Running totals"""

    def test_totals_include_tax(self, cart):
        cart.add_line(2, 2)

        assert cart.subtotal == Decimal("50.00")
        assert cart.tax == Decimal("5.00")
        assert cart.total == Decimal("55.00")

    def test_discount_reduces_total(self, cart):
        cart.add_line(2, 2)

        cart.set_discount("5")

        assert cart.discount == Decimal("5.00")
        assert cart.total == Decimal("50.00")

    @pytest.mark.parametrize("amount", [-1, "abc", "NaN"])
    def test_invalid_discount(self, cart, amount):
        with pytest.raises(ValidationError):
            cart.set_discount(amount)
        assert cart.discount == Decimal("0")

    def test_tax_rounds_to_cents(self, cart):
        # 3 x 4.50 = 13.50 -> tax 1.35
        cart.add_line(3, 3)

        assert cart.tax == Decimal("1.35")
        assert cart.total == Decimal("14.85")


class TestRemoveAndClear:
    """Removing lines"""

    def test_remove_line_recalculates(self, cart):
        cart.add_line(1, 1)
        cart.add_line(2, 1)

        removed = cart.remove_line(0)

        assert removed.product_id == 1
        assert [line.product_id for line in cart.lines] == [2]
        assert cart.subtotal == Decimal("25.00")

    @pytest.mark.parametrize("index", [-1, 1, 5])
    def test_out_of_range_index_is_ignored(self, cart, index):
        cart.add_line(1, 1)

        assert cart.remove_line(index) is None
        assert len(cart) == 1

    def test_clear(self, cart):
        cart.add_line(1, 1)
        cart.set_discount(1)

        cart.clear()

        assert cart.is_empty()
        assert cart.total == Decimal("0.00")
