"""
Product Domain Model

Represents a catalog product and the display categories it is grouped by.

Author: TM3
Date: 2026-10-19
"""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from retail_pos.core.config import LOW_STOCK_THRESHOLD
from retail_pos.domain.common import DomainModel, Money


class Product(DomainModel):
    """
    Product domain model - represents a product in the shared catalog

    Fields:
        id: Internal product ID, assigned by the store at creation
        name: Product name
        category: Free-text category label
        price: Unit selling price
        stock: Units available for sale
        sku: Stock Keeping Unit (unique within the catalog)
        description: Product description
        image: Optional display icon or image URL
        is_active: Inactive products are hidden from the catalog
    """

    id: int = Field(..., description="Internal product ID")
    name: str = Field(..., min_length=1, description="Product name")
    category: str = Field(..., description="Category label")
    price: Money = Field(..., ge=0, description="Unit price")
    stock: int = Field(0, ge=0, description="Units in stock")
    sku: str = Field(..., min_length=1, description="Stock Keeping Unit")
    description: str = Field("", description="Product description")
    image: Optional[str] = Field(None, description="Display icon or image")
    is_active: bool = Field(True, description="Whether product is active")

    @property
    def is_low_stock(self) -> bool:
        """Stock below the fixed low-stock threshold"""
        return self.stock < LOW_STOCK_THRESHOLD

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock <= 0

    def to_dict(self) -> dict:
        """Record plus computed stock flags, for API responses"""
        data = self.to_record()
        data['isLowStock'] = self.is_low_stock
        data['isOutOfStock'] = self.is_out_of_stock
        return data


class Category(DomainModel):
    """Display metadata for a category label"""
    id: int
    name: str
    icon: str = ""


class ProductCreate(BaseModel):
    """Schema for creating a new product"""
    name: str
    category: str
    price: Decimal = Field(..., ge=0)
    stock: int = Field(0, ge=0)
    sku: str
    description: str = ""
    image: Optional[str] = None
    is_active: bool = True


class ProductUpdate(BaseModel):
    """Schema for updating an existing product"""
    name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    stock: Optional[int] = Field(None, ge=0)
    sku: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    is_active: Optional[bool] = None
