"""
Shop Repository - reactive store for shops

Author: TM3
Date: 2026-10-19
"""
from typing import Any, Dict, Optional

from retail_pos.core.data_service import SHOPS
from retail_pos.domain.shop import Shop
from retail_pos.repositories.entity_store import EntityStore


class ShopRepository(EntityStore[Shop]):
    """Store for Shop entities; stamps created/updated timestamps"""

    collection = SHOPS
    model = Shop
    entity_name = "Shop"

    def find_by_email(self, email: str) -> Optional[Shop]:
        """Find shop by login email (case-insensitive)"""
        wanted = email.strip().lower()
        for shop in self._items:
            if shop.email.lower() == wanted:
                return shop
        return None

    def _prepare_new(self, data: Dict[str, Any], new_id: int) -> Dict[str, Any]:
        now = self.clock()
        data = super()._prepare_new(data, new_id)
        data['created_at'] = now
        data['updated_at'] = now
        return data

    def _prepare_update(self, data: Dict[str, Any]) -> Dict[str, Any]:
        data['updated_at'] = self.clock()
        return data
