"""
Product Catalog Service
Business logic for the shared product catalog and inventory signals

Handles:
- Product CRUD (administrators only); deletion deactivates
- SKU uniqueness
- Category derivation and display metadata
- Low-stock signal (stock < 20), always derived, never stored

Author: TM3
Date: 2026-10-19
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Union

from retail_pos.core.auth import AuthContext
from retail_pos.core.config import LOW_STOCK_THRESHOLD
from retail_pos.core.errors import NotFound, ValidationError
from retail_pos.core.events import Subscription
from retail_pos.domain.product import Category, Product, ProductCreate, ProductUpdate
from retail_pos.repositories.product_repository import CategoryRepository, ProductRepository
from retail_pos.services.pagination import (
    PRODUCT_SEARCH_FIELDS, Page, matches_search, paginate_products,
)

logger = logging.getLogger(__name__)


class ProductCatalogService:
    """Catalog/Inventory engine"""

    def __init__(self, products: ProductRepository, categories: CategoryRepository,
                 auth: AuthContext):
        self.products = products
        self.categories = categories
        self.auth = auth

    # =========================================================================
    # Reads
    # =========================================================================

    def list_products(self, include_inactive: bool = False) -> List[Product]:
        if include_inactive:
            return self.products.snapshot
        return self.products.find_active()

    def get_product(self, product_id: int) -> Product:
        product = self.products.find_by_id(product_id)
        if not product:
            raise NotFound("Product", product_id)
        return product

    def search(self, term: str) -> List[Product]:
        """Active products whose name, category or SKU contains term"""
        return [p for p in self.list_products() if matches_search(p, term, PRODUCT_SEARCH_FIELDS)]

    def filter_by_category(self, category: str) -> List[Product]:
        return [p for p in self.list_products() if p.category == category]

    def page(self, search_term: str = "", category: Optional[str] = None, page: int = 1,
             page_size: int = 10) -> Page[Product]:
        return paginate_products(self.list_products(), search_term, category, page, page_size)

    def count(self) -> int:
        return len(self.list_products())

    def total_stock(self) -> int:
        return sum(p.stock for p in self.list_products())

    # =========================================================================
    # Categories
    # =========================================================================

    def get_categories(self) -> List[str]:
        """Distinct category labels of the active catalog"""
        return list(dict.fromkeys(p.category for p in self.list_products()))

    def category_list(self) -> List[Category]:
        """
        Display metadata for the derived categories

        Labels missing from the backing list get an entry without icon,
        and backing entries with no products are left out.
        """
        result = []
        for index, name in enumerate(self.get_categories(), start=1):
            category = self.categories.find_by_name(name)
            result.append(category or Category(id=-index, name=name))
        return result

    def category_by_name(self, name: str) -> Optional[Category]:
        return self.categories.find_by_name(name)

    # =========================================================================
    # Inventory signals
    # =========================================================================

    def low_stock_products(self) -> List[Product]:
        return [p for p in self.list_products() if p.stock < LOW_STOCK_THRESHOLD]

    def low_stock_count(self) -> int:
        return len(self.low_stock_products())

    def watch_low_stock(self, listener: Callable[[int], None]) -> Subscription:
        """Receive the low-stock count now and after every catalog change"""
        return self.products.subscribe(
            lambda products: listener(
                sum(1 for p in products if p.is_active and p.stock < LOW_STOCK_THRESHOLD)
            )
        )

    # =========================================================================
    # Mutations
    # =========================================================================

    def create_product(self, data: Union[ProductCreate, Dict[str, Any]]) -> Product:
        self.auth.require_admin()
        fields = self._fields(data)
        self._ensure_unique_sku(fields.get('sku'))

        product = self.products.create(fields)
        logger.info(f"Product created: {product.id} {product.sku}")
        return product

    def update_product(self, product_id: int, changes: Union[ProductUpdate, Dict[str, Any]]) -> Product:
        self.auth.require_admin()
        self.get_product(product_id)
        fields = self._fields(changes, exclude_unset=True)
        if 'sku' in fields:
            self._ensure_unique_sku(fields['sku'], exclude_id=product_id)

        return self.products.update(product_id, fields)

    def delete_product(self, product_id: int) -> Product:
        """Deactivate; products are never hard-deleted"""
        self.auth.require_admin()
        self.get_product(product_id)
        product = self.products.update(product_id, {'is_active': False})
        logger.info(f"Product deactivated: {product_id}")
        return product

    def adjust_stock(self, product_id: int, delta: int) -> Optional[Product]:
        """
        Add delta (may be negative) to a product's stock, floored at 0

        Returns None when the product no longer exists.
        """
        product = self.products.find_by_id(product_id)
        if not product:
            logger.warning(f"Stock adjustment skipped, product {product_id} not found")
            return None
        return self.products.update(product_id, {'stock': max(0, product.stock + delta)})

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _fields(data: Union[ProductCreate, ProductUpdate, Dict[str, Any]],
                exclude_unset: bool = False) -> Dict[str, Any]:
        if isinstance(data, dict):
            return dict(data)
        return data.model_dump(exclude_unset=exclude_unset)

    def _ensure_unique_sku(self, sku: Optional[str], exclude_id: Optional[int] = None) -> None:
        if not sku or not sku.strip():
            raise ValidationError("SKU is required")
        existing = self.products.find_by_sku(sku)
        if existing and existing.id != exclude_id:
            raise ValidationError(f"SKU {sku} is already used by product {existing.id}")
