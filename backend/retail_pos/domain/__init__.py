"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.

Author: TM3
Date: 2026-10-19
"""
from retail_pos.domain.product import Product, Category
from retail_pos.domain.shop import Shop
from retail_pos.domain.order import Order, OrderItem, OrderStatus
from retail_pos.domain.session import Session, LoginResult

__all__ = ['Product', 'Category', 'Shop', 'Order', 'OrderItem', 'OrderStatus', 'Session', 'LoginResult']
