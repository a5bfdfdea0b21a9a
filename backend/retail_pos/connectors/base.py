"""
Data source contract shared by the local cache and the remote API.

Records are plain JSON-compatible dicts keyed by their integer "id".
Every operation may raise TransportFailure.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List

Record = Dict[str, Any]

PRODUCTS = "products"
SHOPS = "shops"
ORDERS = "orders"
CATEGORIES = "categories"

COLLECTIONS = (PRODUCTS, SHOPS, ORDERS, CATEGORIES)


class DataSource(ABC):
    """Reads and writes named collections"""

    name = "abstract"

    async def prepare(self) -> None:
        """Make bootstrap data available. Called once before the ready signal."""

    @abstractmethod
    async def list(self, collection: str) -> List[Record]:
        """Return every record of a collection"""

    @abstractmethod
    async def create(self, collection: str, record: Record) -> Record:
        """Store a new record and return it as persisted"""

    @abstractmethod
    async def update(self, collection: str, record_id: int, partial: Record) -> Record:
        """Merge partial into the stored record and return the result"""

    @abstractmethod
    async def delete(self, collection: str, record_id: int) -> None:
        """Remove a record"""
