"""
Shop Service
Administrative management of shops and their balances

Administrators see and manage every shop; a shop actor only sees its own
record.

Author: TM3
Date: 2026-10-19
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Union

from retail_pos.core.auth import AuthContext
from retail_pos.core.config import ADMIN_SHOP_ID
from retail_pos.core.errors import NotFound, ValidationError
from retail_pos.domain.common import to_cents
from retail_pos.domain.shop import Shop, ShopCreate, ShopUpdate
from retail_pos.repositories.shop_repository import ShopRepository
from retail_pos.services.pagination import Page, paginate_shops

logger = logging.getLogger(__name__)


class ShopService:
    """Shop administration"""

    def __init__(self, shops: ShopRepository, auth: AuthContext):
        self.shops = shops
        self.auth = auth

    def list_shops(self, include_inactive: bool = False) -> List[Shop]:
        shop_id = self.auth.visible_shop_id()
        shops = self.shops.snapshot
        if shop_id is not None:
            shops = [s for s in shops if s.id == shop_id]
        if not include_inactive:
            shops = [s for s in shops if s.is_active]
        return shops

    def get_shop(self, shop_id: int) -> Shop:
        visible = self.auth.visible_shop_id()
        shop = self.shops.find_by_id(shop_id)
        if not shop or (visible is not None and shop.id != visible):
            raise NotFound("Shop", shop_id)
        return shop

    def page(self, search_term: str = "", page: int = 1, page_size: int = 10) -> Page[Shop]:
        return paginate_shops(self.list_shops(), search_term, page, page_size)

    def create_shop(self, data: Union[ShopCreate, Dict[str, Any]]) -> Shop:
        self.auth.require_admin()
        fields = data if isinstance(data, dict) else data.model_dump()
        fields = dict(fields)

        if not fields.get('name') or not fields.get('email') or not fields.get('phone'):
            raise ValidationError("Please fill in all required fields.")
        self._ensure_unique_email(fields['email'])

        fields['role'] = "shop"
        shop = self.shops.create(fields)
        logger.info(f"Shop created: {shop.id} {shop.email}")
        return shop

    def update_shop(self, shop_id: int, changes: Union[ShopUpdate, Dict[str, Any]]) -> Shop:
        self.auth.require_admin()
        self.get_shop(shop_id)
        fields = changes if isinstance(changes, dict) else changes.model_dump(exclude_unset=True)
        fields = {key: value for key, value in fields.items() if key != 'role'}

        if 'email' in fields:
            self._ensure_unique_email(fields['email'], exclude_id=shop_id)

        return self.shops.update(shop_id, fields)

    def deactivate_shop(self, shop_id: int) -> Shop:
        """Soft delete: the shop can no longer log in, its orders stay intact"""
        self.auth.require_admin()
        self.get_shop(shop_id)
        if shop_id == ADMIN_SHOP_ID:
            raise ValidationError("The administrator account cannot be deactivated")
        shop = self.shops.update(shop_id, {'is_active': False})
        logger.info(f"Shop deactivated: {shop_id}")
        return shop

    def update_balance(self, shop_id: int, amount: Union[Decimal, float, int]) -> Shop:
        return self.update_shop(shop_id, {'balance': amount})

    def total_balance(self) -> Decimal:
        return sum((s.balance for s in self.list_shops()), Decimal("0"))

    def average_balance(self) -> Decimal:
        shops = self.list_shops()
        if not shops:
            return Decimal("0")
        return to_cents(self.total_balance() / len(shops))

    def _ensure_unique_email(self, email: str, exclude_id: int = None) -> None:
        if not email or not email.strip():
            raise ValidationError("Email is required")
        existing = self.shops.find_by_email(email)
        if existing and existing.id != exclude_id:
            raise ValidationError(f"Email {email} is already used by shop {existing.id}")
