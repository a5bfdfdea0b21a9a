"""
Product Repository - reactive store for catalog products and categories

Author: TM3
Date: 2026-10-19
"""
from typing import List, Optional

from retail_pos.core.data_service import CATEGORIES, PRODUCTS
from retail_pos.domain.product import Category, Product
from retail_pos.repositories.entity_store import EntityStore


class ProductRepository(EntityStore[Product]):
    """
    Store for Product entities

    Lookups work on the in-memory snapshot; no I/O.
    """

    collection = PRODUCTS
    model = Product
    entity_name = "Product"

    def find_by_sku(self, sku: str) -> Optional[Product]:
        """
        Find product by SKU (case-insensitive)

        Args:
            sku: Product SKU

        Returns:
            Product or None if not found
        """
        wanted = sku.strip().lower()
        for product in self._items:
            if product.sku.lower() == wanted:
                return product
        return None

    def find_active(self) -> List[Product]:
        """Products visible in the catalog"""
        return [product for product in self._items if product.is_active]


class CategoryRepository(EntityStore[Category]):
    """Backing category list with display icons"""

    collection = CATEGORIES
    model = Category
    entity_name = "Category"

    def find_by_name(self, name: str) -> Optional[Category]:
        for category in self._items:
            if category.name == name:
                return category
        return None
