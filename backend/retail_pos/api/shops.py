"""
Shops API Endpoints
Shop administration and balances

Author: TM3
Date: 2026-10-19
"""
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from retail_pos.api.deps import get_context, page_response
from retail_pos.context import PosContext
from retail_pos.domain.shop import ShopCreate, ShopUpdate

router = APIRouter()


class BalanceUpdate(BaseModel):
    amount: Decimal


@router.get("/")
async def get_shops(
    search: Optional[str] = Query(None, description="Search name, email, phone or address"),
    page: int = Query(1),
    page_size: int = Query(10, ge=1, le=500),
    ctx: PosContext = Depends(get_context)
):
    result = ctx.shop_service.page(search or "", page, page_size)
    return page_response(result, lambda shop: shop.to_record())


@router.get("/stats")
async def get_shop_stats(ctx: PosContext = Depends(get_context)):
    return {
        "status": "success",
        "data": {
            "total_shops": len(ctx.shop_service.list_shops()),
            "total_balance": float(ctx.shop_service.total_balance()),
            "average_balance": float(ctx.shop_service.average_balance())
        }
    }


@router.get("/{shop_id}")
async def get_shop(shop_id: int, ctx: PosContext = Depends(get_context)):
    return {
        "status": "success",
        "data": ctx.shop_service.get_shop(shop_id).to_record()
    }


@router.post("/", status_code=201)
async def create_shop(payload: ShopCreate, ctx: PosContext = Depends(get_context)):
    shop = ctx.shop_service.create_shop(payload)
    return {
        "status": "success",
        "data": shop.to_record()
    }


@router.put("/{shop_id}")
async def update_shop(shop_id: int, payload: ShopUpdate, ctx: PosContext = Depends(get_context)):
    shop = ctx.shop_service.update_shop(shop_id, payload)
    return {
        "status": "success",
        "data": shop.to_record()
    }


@router.patch("/{shop_id}/balance")
async def update_balance(shop_id: int, payload: BalanceUpdate, ctx: PosContext = Depends(get_context)):
    shop = ctx.shop_service.update_balance(shop_id, payload.amount)
    return {
        "status": "success",
        "data": shop.to_record()
    }


@router.delete("/{shop_id}")
async def delete_shop(shop_id: int, ctx: PosContext = Depends(get_context)):
    """Deactivate a shop"""
    shop = ctx.shop_service.deactivate_shop(shop_id)
    return {
        "status": "success",
        "data": shop.to_record()
    }
