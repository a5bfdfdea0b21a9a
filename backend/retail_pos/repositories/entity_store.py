"""
Reactive Entity Store - generic in-memory collection with change notification

The store owns its collection. Mutations replace the collection reference,
publish the new snapshot to every subscriber, and only then hand the durable
write to best-effort persistence.

Author: TM3
Date: 2026-10-19
"""
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from retail_pos.core.data_service import DataService
from retail_pos.core.errors import ValidationError
from retail_pos.core.events import BehaviorSubject, Subscription
from retail_pos.domain.common import DomainModel
from retail_pos.repositories.persistence import BestEffortPersistence

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=DomainModel)

Snapshot = Tuple[ModelT, ...]


class EntityStore(Generic[ModelT]):
    """
    Authoritative in-memory collection for one entity type

    Subclasses set `collection`, `model` and `entity_name`, and may override
    the _prepare_new/_prepare_update hooks to stamp derived fields.
    """

    collection: str = ""
    model: Type[ModelT]
    entity_name: str = "Entity"

    def __init__(self, data_service: DataService, persistence: BestEffortPersistence,
                 clock: Callable[[], datetime] = datetime.now):
        self.data_service = data_service
        self.persistence = persistence
        self.clock = clock
        self.loaded = False
        self._items: Snapshot = ()
        self._subject: BehaviorSubject[Snapshot] = BehaviorSubject(())

    # ------------------------------------------------------------------
    # Loading and observation
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Wait for the ready signal, then replace the collection with durable contents"""
        await self.data_service.wait_ready()
        records = await self.data_service.list(self.collection)

        items = []
        for record in records:
            try:
                items.append(self.model.model_validate(record))
            except PydanticValidationError as e:
                logger.warning(f"Skipping invalid {self.collection} record {record.get('id')}: {e}")

        self._publish(tuple(items))
        self.loaded = True
        logger.info(f"{self.entity_name} store loaded: {len(items)} records")

    def subscribe(self, listener: Callable[[Snapshot], None]) -> Subscription:
        """Receive the current collection now and every later snapshot"""
        return self._subject.subscribe(listener)

    @property
    def snapshot(self) -> List[ModelT]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def find_by_id(self, entity_id: int) -> Optional[ModelT]:
        for item in self._items:
            if item.id == entity_id:
                return item
        return None

    def next_id(self) -> int:
        """max(existing ids) + 1, or 1 for an empty collection"""
        if not self._items:
            return 1
        return max(item.id for item in self._items) + 1

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, data: Dict[str, Any]) -> ModelT:
        new_id = self.next_id()
        entity = self._build(self._prepare_new(dict(data), new_id))

        self._publish(self._items + (entity,))

        record = entity.to_record()
        self.persistence.submit(
            f"new {self.entity_name.lower()} {new_id}",
            lambda: self.data_service.create(self.collection, record),
        )
        return entity

    def update(self, entity_id: int, changes: Dict[str, Any]) -> Optional[ModelT]:
        index = self._index_of(entity_id)
        if index is None:
            return None

        changes = {key: value for key, value in changes.items() if key != 'id'}
        current = self._items[index]
        merged = self._prepare_update({**current.model_dump(), **changes})
        updated = self._build(merged)

        items = list(self._items)
        items[index] = updated
        self._publish(tuple(items))

        record = updated.to_record()
        self.persistence.submit(
            f"{self.entity_name.lower()} {entity_id}",
            lambda: self.data_service.update(self.collection, entity_id, record),
        )
        return updated

    def delete(self, entity_id: int) -> bool:
        index = self._index_of(entity_id)
        if index is None:
            return False

        self._publish(self._items[:index] + self._items[index + 1:])

        self.persistence.submit(
            f"deletion of {self.entity_name.lower()} {entity_id}",
            lambda: self.data_service.delete(self.collection, entity_id),
        )
        return True

    # ------------------------------------------------------------------
    # Hooks and helpers
    # ------------------------------------------------------------------

    def _prepare_new(self, data: Dict[str, Any], new_id: int) -> Dict[str, Any]:
        data['id'] = new_id
        return data

    def _prepare_update(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return data

    def _build(self, data: Dict[str, Any]) -> ModelT:
        try:
            return self.model.model_validate(data)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid {self.entity_name.lower()}: {e}") from e

    def _index_of(self, entity_id: int) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.id == entity_id:
                return index
        return None

    def _publish(self, items: Snapshot) -> None:
        # Replace the reference before anyone is notified
        self._items = items
        self._subject.next(items)
