"""
Orders API Endpoints
Order creation, status lifecycle and statistics

Author: TM3
Date: 2026-10-19
"""
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from retail_pos.api.deps import get_context, page_response
from retail_pos.context import PosContext
from retail_pos.domain.order import OrderStatus

router = APIRouter()


# Request models
class OrderLineRequest(BaseModel):
    product_id: int
    quantity: int


class OrderCreateRequest(BaseModel):
    items: List[OrderLineRequest]
    customer_name: str
    customer_phone: str
    payment_method: str = "Cash"
    notes: str = ""
    discount: Decimal = Field(Decimal("0"), ge=0)


class StatusUpdate(BaseModel):
    status: OrderStatus


@router.get("/")
async def get_orders(
    search: Optional[str] = Query(None, description="Search order number, customer name or phone"),
    status: Optional[str] = Query(None, description="Filter by status ('all' for no filter)"),
    page: int = Query(1),
    page_size: int = Query(10, ge=1, le=500),
    ctx: PosContext = Depends(get_context)
):
    """Orders visible to the current session, filtered and paginated"""
    result = ctx.order_service.page(search or "", status, page, page_size)
    return page_response(result, lambda order: order.to_dict())


@router.get("/stats")
async def get_order_stats(
    shop_id: Optional[int] = Query(None, description="Scope to one shop (admin only)"),
    ctx: PosContext = Depends(get_context)
):
    stats = ctx.order_service.order_stats(shop_id)
    return {
        "status": "success",
        "data": stats.model_dump(mode="json")
    }


@router.get("/recent")
async def get_recent_orders(
    limit: int = Query(5, ge=1, le=50),
    ctx: PosContext = Depends(get_context)
):
    return {
        "status": "success",
        "data": [order.to_dict() for order in ctx.order_service.recent_orders(limit)]
    }


@router.get("/{order_id}")
async def get_order(order_id: int, ctx: PosContext = Depends(get_context)):
    return {
        "status": "success",
        "data": ctx.order_service.get_order(order_id).to_dict()
    }


@router.post("/", status_code=201)
async def create_order(payload: OrderCreateRequest, ctx: PosContext = Depends(get_context)):
    """
    Stage the requested lines in a cart and create a pending order

    Stock is checked line by line while staging; the first failing line
    aborts the request and nothing is created.
    """
    cart = ctx.order_service.new_cart()
    for line in payload.items:
        cart.add_line(line.product_id, line.quantity)
    cart.set_discount(payload.discount)

    order = ctx.order_service.create_order(
        cart,
        payload.customer_name,
        payload.customer_phone,
        payment_method=payload.payment_method,
        notes=payload.notes
    )
    return {
        "status": "success",
        "data": order.to_dict()
    }


@router.patch("/{order_id}/status")
async def update_order_status(order_id: int, payload: StatusUpdate, ctx: PosContext = Depends(get_context)):
    order = ctx.order_service.update_order_status(order_id, payload.status)
    return {
        "status": "success",
        "data": order.to_dict()
    }


@router.delete("/{order_id}")
async def delete_order(order_id: int, ctx: PosContext = Depends(get_context)):
    ctx.order_service.delete_order(order_id)
    return {"status": "success"}
