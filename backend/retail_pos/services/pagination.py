"""
Query/Pagination Filter

Pure functions that turn a collection, a search term, an exact-match filter
and a page descriptor into the visible slice.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, List, Optional, Sequence, TypeVar

from retail_pos.core.errors import ValidationError

T = TypeVar("T")

ORDER_SEARCH_FIELDS = ("order_number", "customer_name", "customer_phone")
PRODUCT_SEARCH_FIELDS = ("name", "category", "sku")
SHOP_SEARCH_FIELDS = ("name", "email", "phone", "address")

# Filter values that mean "no restriction"
NO_FILTER = (None, "", "all")


@dataclass
class Page(Generic[T]):
    items: List[T]
    total_pages: int
    current_page: int
    total_items: int
    page_size: int
    page_numbers: List[int] = field(default_factory=list)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


def _text(value: Any) -> str:
    if value is None:
        return ""
    # str-valued enums (order status) search by their value
    return str(getattr(value, "value", value))


def matches_search(item: Any, term: str, search_fields: Sequence[str]) -> bool:
    """Case-insensitive substring match over any of the fields"""
    if not term:
        return True
    needle = term.strip().lower()
    return any(needle in _text(getattr(item, name, None)).lower() for name in search_fields)


def paginate(collection: Iterable[T], search_term: Optional[str] = "", filter_value: Any = None,
             page: int = 1, page_size: int = 10, search_fields: Sequence[str] = (),
             filter_field: Optional[str] = None) -> Page[T]:
    """
    Filter, search and slice a collection.

    The exact-match filter applies before the search. total_pages is at
    least 1 and an out-of-range page clamps into [1, total_pages].
    """
    if page_size < 1:
        raise ValidationError("page_size must be at least 1")

    items = list(collection)

    if filter_field and filter_value not in NO_FILTER:
        wanted = _text(filter_value)
        items = [item for item in items if _text(getattr(item, filter_field, None)) == wanted]

    if search_term:
        items = [item for item in items if matches_search(item, search_term, search_fields)]

    total_pages = max(1, math.ceil(len(items) / page_size))
    current_page = min(max(1, page), total_pages)
    start = (current_page - 1) * page_size

    return Page(
        items=items[start:start + page_size],
        total_pages=total_pages,
        current_page=current_page,
        total_items=len(items),
        page_size=page_size,
        page_numbers=list(range(1, total_pages + 1)),
    )


def paginate_orders(orders: Iterable[T], search_term: str = "", status: Any = None,
                    page: int = 1, page_size: int = 10) -> Page[T]:
    return paginate(orders, search_term, status, page, page_size,
                    search_fields=ORDER_SEARCH_FIELDS, filter_field="status")


def paginate_products(products: Iterable[T], search_term: str = "", category: Optional[str] = None,
                      page: int = 1, page_size: int = 10) -> Page[T]:
    return paginate(products, search_term, category, page, page_size,
                    search_fields=PRODUCT_SEARCH_FIELDS, filter_field="category")


def paginate_shops(shops: Iterable[T], search_term: str = "", page: int = 1,
                   page_size: int = 10) -> Page[T]:
    return paginate(shops, search_term, None, page, page_size, search_fields=SHOP_SEARCH_FIELDS)
