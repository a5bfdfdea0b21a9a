"""
Pytest fixtures and configuration for Retail POS backend tests

This file provides shared fixtures that can be used across all test modules.
Every fixture works on a temporary local cache; no network or database is
needed.

Author: TM3
Date: 2026-10-19
"""
import asyncio
import json
from datetime import datetime

import pytest

from retail_pos.connectors.local_cache_connector import LocalCacheConnector
from retail_pos.context import PosContext
from retail_pos.core.config import Settings
from retail_pos.core.data_service import DataService
from retail_pos.core.notifications import AlertService
from retail_pos.repositories.persistence import BestEffortPersistence

ADMIN_EMAIL = "admin@cxp.com"
ADMIN_PASSWORD = "Admin123!"
SHOP_PASSWORD = "shop123"

FIXED_NOW = datetime(2026, 3, 14, 9, 30)

SAMPLE_PRODUCTS = [
    {"id": 1, "name": "Widget", "category": "Tools", "price": 10, "stock": 5,
     "sku": "W-1", "description": "Small widget", "isActive": True},
    {"id": 2, "name": "Gadget", "category": "Tools", "price": 25, "stock": 100,
     "sku": "G-1", "description": "", "isActive": True},
    {"id": 3, "name": "Green Tea", "category": "Drinks", "price": 4.5, "stock": 50,
     "sku": "T-1", "description": "", "isActive": True},
    {"id": 4, "name": "Old Stock", "category": "Clearance", "price": 1, "stock": 3,
     "sku": "OLD-1", "description": "", "isActive": False},
]

SAMPLE_SHOPS = [
    {"id": 1, "name": "Downtown Store", "email": "downtown@cxp.com", "phone": "555-0101",
     "address": "12 Main Street", "balance": 1000, "role": "shop", "isActive": True},
    {"id": 2, "name": "Harbor Kiosk", "email": "harbor@cxp.com", "phone": "555-0102",
     "address": "3 Pier Road", "balance": 500, "role": "shop", "isActive": True},
    {"id": 3, "name": "Closed Outlet", "email": "closed@cxp.com", "phone": "555-0103",
     "address": "Terminal B", "balance": 0, "role": "shop", "isActive": False},
]

SAMPLE_CATEGORIES = [
    {"id": 1, "name": "Tools", "icon": "🔧"},
    {"id": 2, "name": "Pastries", "icon": "🥐"},
]


def make_order_record(order_id, shop_id=1, status="pending", total=55, quantity=2, price=25,
                      product_id=2, customer_name="Alex Kim"):
    """Order record in the cached (camelCase) shape"""
    subtotal = quantity * price
    return {
        "id": order_id,
        "orderNumber": f"ORD-2026-{order_id:04d}",
        "shopId": shop_id,
        "shopName": "Downtown Store" if shop_id == 1 else "Harbor Kiosk",
        "items": [{"productId": product_id, "productName": "Gadget", "quantity": quantity,
                   "price": price, "total": subtotal}],
        "subtotal": subtotal,
        "tax": 0,
        "discount": 0,
        "total": total,
        "status": status,
        "paymentMethod": "Cash",
        "customerName": customer_name,
        "customerPhone": f"555-20{order_id:02d}",
        "notes": "",
        "createdDate": f"2026-03-{order_id:02d}T10:00:00",
        "completedDate": None,
    }


def write_seed(seed_dir, orders=None):
    seed_dir.mkdir(parents=True, exist_ok=True)
    collections = {
        "products": SAMPLE_PRODUCTS,
        "shops": SAMPLE_SHOPS,
        "categories": SAMPLE_CATEGORIES,
        "orders": orders or [],
    }
    for name, records in collections.items():
        with open(seed_dir / f"{name}.json", "w", encoding="utf-8") as f:
            json.dump(records, f)
    return seed_dir


@pytest.fixture
def seed_dir(tmp_path):
    """Seed directory with sample products, shops, categories and no orders"""
    return write_seed(tmp_path / "seed")


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def connector(cache_dir, seed_dir):
    return LocalCacheConnector(cache_dir, seed_dir)


@pytest.fixture
def data_service(connector):
    return DataService(connector)


@pytest.fixture
def alerts():
    return AlertService()


@pytest.fixture
def persistence(alerts):
    return BestEffortPersistence(alerts)


@pytest.fixture
def settings(tmp_path, seed_dir, cache_dir):
    """
    Settings pointing at the temporary cache

    Scope: function (fresh cache per test)
    """
    return Settings(
        DATA_SOURCE="local",
        AUTH_SOURCE="local",
        CACHE_DIR=cache_dir,
        SEED_DIR=seed_dir,
        SESSION_FILE=tmp_path / "session.json",
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        AUTH_SECRET=None,
    )


@pytest.fixture
def pos(settings):
    """Started POS context with nobody logged in and a fixed clock for orders"""
    ctx = PosContext(settings)
    asyncio.run(ctx.startup())
    ctx.orders.clock = lambda: FIXED_NOW
    ctx.order_service.clock = lambda: FIXED_NOW
    return ctx


@pytest.fixture
def admin_pos(pos):
    """POS context with the administrator logged in"""
    asyncio.run(pos.auth_service.login(ADMIN_EMAIL, ADMIN_PASSWORD))
    return pos


@pytest.fixture
def shop_pos(pos):
    """POS context with shop 1 (Downtown Store) logged in"""
    asyncio.run(pos.auth_service.login("downtown@cxp.com", SHOP_PASSWORD))
    return pos
