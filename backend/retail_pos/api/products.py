"""
Products API Endpoints
Handles product catalog management and queries

Author: TM3
Date: 2026-10-19
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from retail_pos.api.deps import get_context, page_response
from retail_pos.context import PosContext
from retail_pos.domain.product import ProductCreate, ProductUpdate

router = APIRouter()


@router.get("/")
async def get_products(
    search: Optional[str] = Query(None, description="Search by name, category or SKU"),
    category: Optional[str] = Query(None, description="Filter by category"),
    page: int = Query(1),
    page_size: int = Query(10, ge=1, le=500),
    ctx: PosContext = Depends(get_context)
):
    """Active products, filtered and paginated"""
    result = ctx.catalog.page(search or "", category, page, page_size)
    return page_response(result, lambda product: product.to_dict())


@router.get("/categories")
async def get_categories(ctx: PosContext = Depends(get_context)):
    """Derived category labels with their display metadata"""
    return {
        "status": "success",
        "data": [category.to_record() for category in ctx.catalog.category_list()]
    }


@router.get("/stats")
async def get_product_stats(ctx: PosContext = Depends(get_context)):
    """
    Get product statistics

    Returns:
    - Total active products
    - Total units in stock
    - Products below the low-stock threshold
    """
    return {
        "status": "success",
        "data": {
            "total_products": ctx.catalog.count(),
            "total_stock": ctx.catalog.total_stock(),
            "low_stock_count": ctx.catalog.low_stock_count(),
            "categories": len(ctx.catalog.get_categories())
        }
    }


@router.get("/{product_id}")
async def get_product(product_id: int, ctx: PosContext = Depends(get_context)):
    return {
        "status": "success",
        "data": ctx.catalog.get_product(product_id).to_dict()
    }


@router.post("/", status_code=201)
async def create_product(payload: ProductCreate, ctx: PosContext = Depends(get_context)):
    product = ctx.catalog.create_product(payload)
    return {
        "status": "success",
        "data": product.to_dict()
    }


@router.put("/{product_id}")
async def update_product(product_id: int, payload: ProductUpdate, ctx: PosContext = Depends(get_context)):
    product = ctx.catalog.update_product(product_id, payload)
    return {
        "status": "success",
        "data": product.to_dict()
    }


@router.delete("/{product_id}")
async def delete_product(product_id: int, ctx: PosContext = Depends(get_context)):
    """Deactivate a product"""
    product = ctx.catalog.delete_product(product_id)
    return {
        "status": "success",
        "data": product.to_dict()
    }
