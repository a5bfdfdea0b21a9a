"""
Shared helpers for API routers
"""
from typing import Any, Callable

from fastapi import Request

from retail_pos.context import PosContext
from retail_pos.services.pagination import Page


def get_context(request: Request) -> PosContext:
    """FastAPI dependency returning the process-wide POS context"""
    return request.app.state.context


def page_response(page: Page, serialize: Callable[[Any], dict]) -> dict:
    return {
        "status": "success",
        "total": page.total_items,
        "page": page.current_page,
        "page_size": page.page_size,
        "total_pages": page.total_pages,
        "pages": page.page_numbers,
        "count": len(page.items),
        "data": [serialize(item) for item in page.items]
    }
