"""
Repository Layer - Reactive Entity Stores

Each repository owns the in-memory collection of one entity type,
notifies subscribers on change and persists through the DataService.

Author: TM3
Date: 2026-10-19
"""
from retail_pos.repositories.entity_store import EntityStore
from retail_pos.repositories.persistence import BestEffortPersistence
from retail_pos.repositories.product_repository import ProductRepository, CategoryRepository
from retail_pos.repositories.shop_repository import ShopRepository
from retail_pos.repositories.order_repository import OrderRepository

__all__ = [
    'EntityStore',
    'BestEffortPersistence',
    'ProductRepository',
    'CategoryRepository',
    'ShopRepository',
    'OrderRepository'
]
