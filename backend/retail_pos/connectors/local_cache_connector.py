"""
Local Cache Connector
Keeps each collection as a JSON file in a cache directory

On first run, missing collections are seeded from the bundled seed files so
the engine has a catalog, shops and sample orders to work with.

Author: TM3
Date: 2026-10-19
"""
import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from retail_pos.connectors.base import COLLECTIONS, DataSource, Record
from retail_pos.core.errors import TransportFailure

logger = logging.getLogger(__name__)


class LocalCacheConnector(DataSource):
    """
    Durable local cache backed by one JSON file per collection

    Handles:
    - Seeding missing collections from seed files
    - Record-level create/update/delete with atomic file replacement
    - Clearing the cache (reset to seed data on next prepare)
    """

    name = "local"

    def __init__(self, cache_dir: Path, seed_dir: Optional[Path] = None):
        """
        Args:
            cache_dir: Directory holding <collection>.json files
            seed_dir: Directory with seed <collection>.json files (optional)
        """
        self.cache_dir = Path(cache_dir)
        self.seed_dir = Path(seed_dir) if seed_dir else None

    def _path(self, collection: str) -> Path:
        return self.cache_dir / f"{collection}.json"

    async def prepare(self) -> None:
        """Create the cache directory and seed any collection not cached yet"""
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TransportFailure(f"Cannot create cache directory {self.cache_dir}: {e}") from e

        for collection in COLLECTIONS:
            if self._path(collection).exists():
                logger.info(f"{collection} already in local cache")
                continue

            records = self._load_seed(collection)
            self._write(collection, records)
            logger.info(f"Seeded {collection} with {len(records)} records")

    def _load_seed(self, collection: str) -> List[Record]:
        if not self.seed_dir:
            return []

        seed_file = self.seed_dir / f"{collection}.json"
        if not seed_file.exists():
            logger.warning(f"No seed file for {collection} at {seed_file}")
            return []

        try:
            with open(seed_file, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            # A broken seed must not block start-up; the collection starts empty
            logger.error(f"Error loading seed file {seed_file}: {e}")
            return []

    def _read(self, collection: str) -> List[Record]:
        path = self._path(collection)
        if not path.exists():
            return []
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise TransportFailure(f"Cannot read {collection} from cache: {e}") from e

    def _write(self, collection: str, records: List[Record]) -> None:
        path = self._path(collection)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except (OSError, TypeError) as e:
            raise TransportFailure(f"Cannot write {collection} to cache: {e}") from e

    async def list(self, collection: str) -> List[Record]:
        return self._read(collection)

    async def create(self, collection: str, record: Record) -> Record:
        records = self._read(collection)
        records.append(record)
        self._write(collection, records)
        return record

    async def update(self, collection: str, record_id: int, partial: Record) -> Record:
        records = self._read(collection)
        for index, existing in enumerate(records):
            if existing.get('id') == record_id:
                records[index] = {**existing, **partial}
                self._write(collection, records)
                return records[index]

        raise TransportFailure(f"{collection} record {record_id} is not in the local cache")

    async def delete(self, collection: str, record_id: int) -> None:
        records = self._read(collection)
        remaining = [r for r in records if r.get('id') != record_id]
        if len(remaining) != len(records):
            self._write(collection, remaining)

    async def export_all(self) -> dict:
        """Snapshot of every collection, for backups"""
        return {collection: self._read(collection) for collection in COLLECTIONS}

    async def import_all(self, data: dict) -> None:
        """Replace the collections present in data"""
        for collection in COLLECTIONS:
            if collection in data:
                self._write(collection, data[collection])

    def clear(self) -> None:
        """Remove every cached collection; the next prepare() reseeds them"""
        for collection in COLLECTIONS:
            try:
                self._path(collection).unlink(missing_ok=True)
            except OSError as e:
                raise TransportFailure(f"Cannot clear {collection}: {e}") from e
