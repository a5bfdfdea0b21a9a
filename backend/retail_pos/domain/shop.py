"""
Shop Domain Model

A shop is the authorization anchor for order visibility. The administrator
is represented by a synthetic shop with the reserved id 0.

Author: TM3
Date: 2026-10-19
"""
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

from retail_pos.core.config import ADMIN_SHOP_ID
from retail_pos.domain.common import DomainModel, Money

ShopRole = Literal["admin", "shop"]


class Shop(DomainModel):
    """
    Shop domain model

    Fields:
        id: Internal shop ID (0 is reserved for the administrator)
        name: Shop name
        email: Login key, unique across shops
        phone: Contact phone
        address: Street address
        balance: Account balance
        contact_person, city, state, zip_code: Optional contact metadata
        role: "admin" or "shop"
        is_active: Inactive shops cannot log in
        created_at: When the shop was created
        updated_at: When the shop was last modified
    """

    id: int = Field(..., description="Internal shop ID")
    name: str = Field(..., min_length=1, description="Shop name")
    email: str = Field(..., min_length=1, description="Login email")
    phone: str = Field("", description="Contact phone")
    address: str = Field("", description="Street address")
    balance: Money = Field(Decimal("0"), description="Account balance")

    contact_person: Optional[str] = Field(None, description="Contact person")
    city: Optional[str] = Field(None, description="City")
    state: Optional[str] = Field(None, description="State")
    zip_code: Optional[str] = Field(None, description="Zip code")

    role: ShopRole = Field("shop", description="Role tag")
    is_active: bool = Field(True, description="Whether shop is active")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    @property
    def is_admin(self) -> bool:
        return self.id == ADMIN_SHOP_ID or self.role == "admin"


class ShopCreate(BaseModel):
    """Schema for creating a new shop"""
    name: str
    email: str
    phone: str = ""
    address: str = ""
    balance: Decimal = Decimal("0")
    contact_person: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None


class ShopUpdate(BaseModel):
    """Schema for updating an existing shop"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    balance: Optional[Decimal] = None
    contact_person: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    is_active: Optional[bool] = None
