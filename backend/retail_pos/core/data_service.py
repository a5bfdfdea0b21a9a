"""
Persistence Adapter

Centralizes access to the configured data source and exposes the "ready"
signal. Collections are not authoritative until bootstrap() has completed;
stores must await wait_ready() instead of treating an empty read as real.

Author: TM3
Date: 2026-10-19
"""
import asyncio
import logging
from typing import List, Optional

from retail_pos.connectors.base import (
    CATEGORIES, COLLECTIONS, ORDERS, PRODUCTS, SHOPS, DataSource, Record,
)
from retail_pos.connectors.local_cache_connector import LocalCacheConnector
from retail_pos.connectors.remote_api_connector import RemoteApiConnector
from retail_pos.core.config import Settings
from retail_pos.core.errors import TransportFailure
from retail_pos.core.events import BehaviorSubject

logger = logging.getLogger(__name__)

__all__ = [
    'DataService', 'build_data_source',
    'PRODUCTS', 'SHOPS', 'ORDERS', 'CATEGORIES', 'COLLECTIONS',
]


def build_data_source(settings: Settings) -> DataSource:
    """Select the data source implementation from configuration"""
    if settings.DATA_SOURCE == "remote":
        return RemoteApiConnector(
            settings.REMOTE_API_URL,
            access_token=settings.REMOTE_API_TOKEN,
            timeout=settings.REMOTE_TIMEOUT,
        )
    return LocalCacheConnector(settings.CACHE_DIR, settings.SEED_DIR)


class DataService:
    """Reads/writes named collections through one DataSource"""

    def __init__(self, source: DataSource):
        self.source = source
        self.ready: BehaviorSubject[bool] = BehaviorSubject(False)
        self._ready_event: Optional[asyncio.Event] = None

    def _event(self) -> asyncio.Event:
        # Created lazily so it binds to the loop that actually waits on it
        if self._ready_event is None:
            self._ready_event = asyncio.Event()
            if self.ready.value:
                self._ready_event.set()
        return self._ready_event

    async def bootstrap(self) -> None:
        """Prepare bootstrap data, then fire the ready signal"""
        logger.info(f"DataService: initializing {self.source.name} data source...")
        try:
            await self.source.prepare()
        except TransportFailure as e:
            # Still mark ready; stores then load whatever is readable
            logger.error(f"DataService: error preparing data: {e}")
        self._mark_ready()
        logger.info("DataService: data ready")

    def _mark_ready(self) -> None:
        self._event().set()
        self.ready.next(True)

    @property
    def is_ready(self) -> bool:
        return self.ready.value

    async def wait_ready(self) -> None:
        await self._event().wait()

    async def list(self, collection: str) -> List[Record]:
        return await self.source.list(collection)

    async def create(self, collection: str, record: Record) -> Record:
        return await self.source.create(collection, record)

    async def update(self, collection: str, record_id: int, partial: Record) -> Record:
        return await self.source.update(collection, record_id, partial)

    async def delete(self, collection: str, record_id: int) -> None:
        await self.source.delete(collection, record_id)

    async def export_snapshot(self) -> dict:
        """Every collection as plain records (feeds backups and exports)"""
        return {collection: await self.source.list(collection) for collection in COLLECTIONS}
