"""
Session Domain Models

A session records who is acting: the resolved shop (or the synthetic admin
shop) plus the role and token returned by the login source.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from retail_pos.domain.common import DomainModel
from retail_pos.domain.shop import Shop, ShopRole


class LoginResult(BaseModel):
    """What a session source returns for accepted credentials"""
    actor_id: int
    role: ShopRole
    email: str
    name: Optional[str] = None
    token: Optional[str] = None


class Session(DomainModel):
    """Persisted session record"""
    shop: Shop
    role: ShopRole
    login_time: datetime = Field(default_factory=datetime.now)
    is_logged_in: bool = True
    token: Optional[str] = None
