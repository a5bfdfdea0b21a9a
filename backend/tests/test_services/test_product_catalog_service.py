"""
Unit tests for ProductCatalogService

Author: TM3
Date: 2026-10-19
"""
from decimal import Decimal

import pytest

from retail_pos.core.errors import NotAuthenticated, NotFound, PermissionDenied, ValidationError
from retail_pos.domain.product import ProductCreate, ProductUpdate


class TestCatalogReads:
    """Listing, search and categories"""

    def test_inactive_products_are_hidden(self, pos):
        assert [p.id for p in pos.catalog.list_products()] == [1, 2, 3]
        assert len(pos.catalog.list_products(include_inactive=True)) == 4
        assert pos.catalog.count() == 3

    def test_get_product(self, pos):
        assert pos.catalog.get_product(2).name == "Gadget"
        with pytest.raises(NotFound):
            pos.catalog.get_product(99)

    def test_search(self, pos):
        assert [p.id for p in pos.catalog.search("tea")] == [3]
        assert [p.id for p in pos.catalog.search("g-1")] == [2]

    def test_categories_are_derived_from_active_products(self, pos):
        assert pos.catalog.get_categories() == ["Tools", "Drinks"]
        assert pos.catalog.filter_by_category("Tools")[1].id == 2

    def test_category_list_uses_backing_metadata(self, pos):
        categories = pos.catalog.category_list()

        assert [c.name for c in categories] == ["Tools", "Drinks"]
        assert categories[0].icon == "🔧"
        # No backing entry for Drinks
        assert categories[1].icon == ""
        assert pos.catalog.category_by_name("Pastries").icon == "🥐"

    def test_total_stock(self, pos):
        assert pos.catalog.total_stock() == 155

    def test_page(self, pos):
        page = pos.catalog.page(category="Tools", page_size=1, page=2)

        assert [p.id for p in page.items] == [2]
        assert page.total_pages == 2


class TestLowStock:
    """Low-stock signal (threshold 20)"""

    def test_low_stock_products(self, pos):
        assert [p.id for p in pos.catalog.low_stock_products()] == [1]
        assert pos.catalog.low_stock_count() == 1

    def test_watch_low_stock_follows_changes(self, admin_pos):
        seen = []
        admin_pos.catalog.watch_low_stock(seen.append)

        admin_pos.catalog.update_product(2, ProductUpdate(stock=19))
        admin_pos.catalog.adjust_stock(1, 100)

        assert seen == [1, 2, 1]


class TestCatalogMutations:
    """Administrator-only mutations"""

    def test_create_product(self, admin_pos):
        product = admin_pos.catalog.create_product(
            ProductCreate(name="Bolt", category="Hardware", price=Decimal("0.5"), stock=200, sku="B-1")
        )

        assert product.id == 5
        assert product.price == Decimal("0.50")
        assert "Hardware" in admin_pos.catalog.get_categories()

    def test_create_requires_admin(self, shop_pos):
        with pytest.raises(PermissionDenied):
            shop_pos.catalog.create_product({"name": "Bolt", "category": "X", "price": 1, "sku": "B-1"})

    def test_create_requires_session(self, pos):
        with pytest.raises(NotAuthenticated):
            pos.catalog.create_product({"name": "Bolt", "category": "X", "price": 1, "sku": "B-1"})

    def test_duplicate_sku_rejected(self, admin_pos):
        with pytest.raises(ValidationError):
            admin_pos.catalog.create_product({"name": "Copy", "category": "X", "price": 1, "sku": "w-1"})
        assert len(admin_pos.products) == 4

    def test_update_keeps_unset_fields(self, admin_pos):
        updated = admin_pos.catalog.update_product(1, ProductUpdate(price=Decimal("12.345")))

        assert updated.price == Decimal("12.35")
        assert updated.stock == 5
        assert updated.sku == "W-1"

    def test_update_to_taken_sku_rejected(self, admin_pos):
        with pytest.raises(ValidationError):
            admin_pos.catalog.update_product(1, {"sku": "G-1"})

    def test_update_missing_product(self, admin_pos):
        with pytest.raises(NotFound):
            admin_pos.catalog.update_product(99, {"stock": 1})

    def test_delete_deactivates(self, admin_pos):
        product = admin_pos.catalog.delete_product(1)

        assert product.is_active is False
        assert admin_pos.products.find_by_id(1) is not None
        assert 1 not in [p.id for p in admin_pos.catalog.list_products()]

    def test_adjust_stock_floors_at_zero(self, pos):
        assert pos.catalog.adjust_stock(1, -10).stock == 0
        assert pos.catalog.adjust_stock(99, 1) is None
