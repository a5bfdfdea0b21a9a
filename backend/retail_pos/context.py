"""
Application context

Builds the data source, stores, auth context and services once per process
and hands them to whoever needs them. Nothing in the engine is global.

Author: TM3
Date: 2026-10-19
"""
import logging
from typing import Optional

from retail_pos.connectors.base import DataSource
from retail_pos.core.auth import AuthContext, SessionStore
from retail_pos.core.config import Settings
from retail_pos.core.data_service import DataService, build_data_source
from retail_pos.core.notifications import AlertService
from retail_pos.repositories.order_repository import OrderRepository
from retail_pos.repositories.persistence import BestEffortPersistence
from retail_pos.repositories.product_repository import CategoryRepository, ProductRepository
from retail_pos.repositories.shop_repository import ShopRepository
from retail_pos.services.auth_service import AuthService, SessionSource, build_session_source
from retail_pos.services.order_service import OrderService
from retail_pos.services.product_catalog_service import ProductCatalogService
from retail_pos.services.shop_service import ShopService

logger = logging.getLogger(__name__)


class PosContext:
    """Everything one running POS engine needs, wired together"""

    def __init__(self, settings: Settings, source: Optional[DataSource] = None,
                 session_source: Optional[SessionSource] = None):
        self.settings = settings
        self.alerts = AlertService()
        self.data_service = DataService(source or build_data_source(settings))
        self.persistence = BestEffortPersistence(self.alerts)

        self.products = ProductRepository(self.data_service, self.persistence)
        self.categories = CategoryRepository(self.data_service, self.persistence)
        self.shops = ShopRepository(self.data_service, self.persistence)
        self.orders = OrderRepository(self.data_service, self.persistence)

        self.auth = AuthContext(SessionStore(settings.SESSION_FILE))
        self.auth_service = AuthService(
            session_source or build_session_source(settings, self.shops),
            self.auth,
            self.shops,
        )

        self.catalog = ProductCatalogService(self.products, self.categories, self.auth)
        self.order_service = OrderService(
            self.orders,
            self.catalog,
            self.auth,
            decrement_stock_on_completion=settings.DECREMENT_STOCK_ON_COMPLETION,
        )
        self.shop_service = ShopService(self.shops, self.auth)

    async def startup(self) -> None:
        """Bootstrap data, load every store, restore the persisted session"""
        await self.data_service.bootstrap()
        for store in (self.products, self.categories, self.shops, self.orders):
            await store.load()
        self.auth.restore()
        logger.info(f"POS context ready ({self.data_service.source.name} data source)")

    async def shutdown(self) -> None:
        """Wait for outstanding durable writes"""
        pending = self.persistence.pending_count
        if pending:
            logger.info(f"Waiting for {pending} pending writes")
        await self.persistence.drain()
