"""
Unit tests for ShopService

Author: TM3
Date: 2026-10-19
"""
import asyncio
from decimal import Decimal

import pytest

from retail_pos.core.errors import InvalidCredentials, NotFound, PermissionDenied, ValidationError
from retail_pos.domain.shop import ShopCreate, ShopUpdate


class TestShopReads:
    """Visibility of shop records"""

    def test_admin_lists_active_shops(self, admin_pos):
        assert [s.id for s in admin_pos.shop_service.list_shops()] == [1, 2]
        assert len(admin_pos.shop_service.list_shops(include_inactive=True)) == 3

    def test_shop_sees_only_itself(self, shop_pos):
        assert [s.id for s in shop_pos.shop_service.list_shops()] == [1]
        with pytest.raises(NotFound):
            shop_pos.shop_service.get_shop(2)

    def test_page_search(self, admin_pos):
        page = admin_pos.shop_service.page("pier")

        assert [s.name for s in page.items] == ["Harbor Kiosk"]

    def test_balances(self, admin_pos):
        assert admin_pos.shop_service.total_balance() == Decimal("1500.00")
        assert admin_pos.shop_service.average_balance() == Decimal("750.00")


class TestShopMutations:
    """Administrator-only shop management"""

    def test_create_shop(self, admin_pos):
        shop = admin_pos.shop_service.create_shop(
            ShopCreate(name="Mall Stand", email="mall@cxp.com", phone="555-0199")
        )

        assert shop.id == 4
        assert shop.role == "shop"
        assert shop.created_at is not None

    def test_new_shop_can_log_in(self, admin_pos):
        admin_pos.shop_service.create_shop({"name": "Mall", "email": "mall@cxp.com", "phone": "1"})

        session = asyncio.run(admin_pos.auth_service.login("mall@cxp.com", "shop123"))

        assert session.shop.name == "Mall"

    @pytest.mark.parametrize("missing", ["name", "email", "phone"])
    def test_required_fields(self, admin_pos, missing):
        data = {"name": "Mall", "email": "mall@cxp.com", "phone": "1"}
        data[missing] = ""

        with pytest.raises(ValidationError):
            admin_pos.shop_service.create_shop(data)

    def test_duplicate_email_rejected(self, admin_pos):
        with pytest.raises(ValidationError):
            admin_pos.shop_service.create_shop({"name": "Copy", "email": "Harbor@cxp.com", "phone": "1"})

    def test_shop_cannot_create_shops(self, shop_pos):
        with pytest.raises(PermissionDenied):
            shop_pos.shop_service.create_shop({"name": "Mall", "email": "mall@cxp.com", "phone": "1"})

    def test_update_shop_cannot_change_role(self, admin_pos):
        updated = admin_pos.shop_service.update_shop(1, {"phone": "555-9999", "role": "admin"})

        assert updated.phone == "555-9999"
        assert updated.role == "shop"

    def test_update_with_schema(self, admin_pos):
        updated = admin_pos.shop_service.update_shop(2, ShopUpdate(city="Portland"))

        assert updated.city == "Portland"
        assert updated.name == "Harbor Kiosk"

    def test_update_balance(self, admin_pos):
        shop = admin_pos.shop_service.update_balance(1, Decimal("10.005"))

        assert shop.balance == Decimal("10.01")

    def test_deactivate_shop_blocks_login(self, admin_pos):
        admin_pos.shop_service.deactivate_shop(2)

        assert admin_pos.shops.find_by_id(2).is_active is False
        with pytest.raises(InvalidCredentials):
            asyncio.run(admin_pos.auth_service.login("harbor@cxp.com", "shop123"))
