"""
Unit tests for the query/pagination helpers

Author: TM3
Date: 2026-10-19
"""
from dataclasses import dataclass

import pytest

from retail_pos.core.errors import ValidationError
from retail_pos.domain.order import OrderStatus
from retail_pos.services.pagination import (
    matches_search, paginate, paginate_orders, paginate_products, paginate_shops,
)


@dataclass
class Row:
    name: str
    category: str = "Tools"
    sku: str = ""
    status: OrderStatus = OrderStatus.PENDING
    order_number: str = ""
    customer_name: str = ""
    customer_phone: str = ""


def rows(count):
    return [Row(name=f"Item {i}") for i in range(1, count + 1)]


class TestPaginate:
    """Slicing and page clamping"""

    def test_empty_collection_has_one_page(self):
        page = paginate([], page=3)

        assert page.items == []
        assert page.total_pages == 1
        assert page.current_page == 1
        assert page.total_items == 0
        assert page.page_numbers == [1]

    def test_slices_requested_page(self):
        page = paginate(rows(25), page=2, page_size=10)

        assert [r.name for r in page.items] == [f"Item {i}" for i in range(11, 21)]
        assert page.total_pages == 3
        assert page.page_numbers == [1, 2, 3]
        assert page.has_previous and page.has_next

    @pytest.mark.parametrize("requested,expected", [(0, 1), (-4, 1), (9, 3)])
    def test_out_of_range_page_clamps(self, requested, expected):
        page = paginate(rows(25), page=requested, page_size=10)

        assert page.current_page == expected
        assert len(page.items) == (5 if expected == 3 else 10)

    def test_invalid_page_size(self):
        with pytest.raises(ValidationError):
            paginate(rows(3), page_size=0)

    def test_items_never_exceed_page_size(self):
        for size in (1, 3, 7, 50):
            page = paginate(rows(20), page=2, page_size=size)
            assert len(page.items) <= size


class TestSearchAndFilter:
    """Search term and exact-match filter"""

    def test_search_is_case_insensitive_substring(self):
        items = [Row(name="Green Tea"), Row(name="Black tea"), Row(name="Coffee")]

        page = paginate_products(items, "TEA")

        assert [r.name for r in page.items] == ["Green Tea", "Black tea"]

    def test_search_matches_any_field(self):
        item = Row(name="Widget", sku="W-100")

        assert matches_search(item, "w-1", ("name", "sku"))
        assert not matches_search(item, "zzz", ("name", "sku"))
        assert matches_search(item, "", ("name",))

    def test_filter_applies_before_search(self):
        items = [
            Row(name="Tea Pot", category="Kitchen"),
            Row(name="Green Tea", category="Drinks"),
        ]

        page = paginate_products(items, "tea", "Drinks")

        assert [r.name for r in page.items] == ["Green Tea"]
        assert page.total_items == 1

    @pytest.mark.parametrize("no_filter", [None, "", "all"])
    def test_all_means_no_filter(self, no_filter):
        items = [Row(name="a", category="X"), Row(name="b", category="Y")]

        assert paginate_products(items, "", no_filter).total_items == 2

    def test_orders_filter_by_status_value(self):
        items = [
            Row(name="1", status=OrderStatus.PENDING, order_number="ORD-2026-0001"),
            Row(name="2", status=OrderStatus.COMPLETED, order_number="ORD-2026-0002"),
        ]

        assert [r.name for r in paginate_orders(items, "", "completed").items] == ["2"]
        assert [r.name for r in paginate_orders(items, "0001").items] == ["1"]

    def test_shops_search(self):
        @dataclass
        class ShopRow:
            name: str
            email: str
            phone: str = ""
            address: str = ""

        shops = [ShopRow("Downtown", "downtown@cxp.com"), ShopRow("Harbor", "harbor@cxp.com")]

        assert [s.name for s in paginate_shops(shops, "HARBOR@").items] == ["Harbor"]
