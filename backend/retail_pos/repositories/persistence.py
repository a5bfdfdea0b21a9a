"""
Best-effort persistence

Durable writes run after the in-memory mutation has already been applied
and published. A failed write is logged, published on `failures` and raised
as an error alert. It is never rolled back in memory.

Author: TM3
Date: 2026-10-19
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, Set

from retail_pos.core.errors import TransportFailure
from retail_pos.core.events import BehaviorSubject
from retail_pos.core.notifications import AlertService

logger = logging.getLogger(__name__)

WriteOperation = Callable[[], Awaitable[Any]]


@dataclass
class WriteFailure:
    description: str
    error: TransportFailure
    occurred_at: datetime = field(default_factory=datetime.now)


class BestEffortPersistence:
    """
    Runs durable writes without blocking the caller

    Inside a running event loop each write becomes a task that waits for the
    previously submitted write, so writes reach the data source one at a time
    in submission order. Without a running loop the write runs to completion
    before submit() returns (the in-memory step has already happened).
    """

    def __init__(self, alerts: Optional[AlertService] = None):
        self.alerts = alerts
        self.failures: BehaviorSubject[Optional[WriteFailure]] = BehaviorSubject(None)
        self.failure_count = 0
        self._pending: Set[asyncio.Task] = set()
        self._tail: Optional[asyncio.Task] = None

    def submit(self, description: str, operation: WriteOperation) -> Optional[asyncio.Task]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._run(description, operation))
            return None

        previous = self._tail
        if previous is not None and (previous.done() or previous.get_loop() is not loop):
            previous = None
        task = loop.create_task(self._run_after(previous, description, operation))
        self._tail = task
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for every write submitted so far"""
        while True:
            pending = [task for task in self._pending if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending)

    async def _run_after(self, previous: Optional[asyncio.Task], description: str,
                         operation: WriteOperation) -> None:
        if previous is not None:
            # wait() never raises, whatever happened to the earlier write
            await asyncio.wait({previous})
        await self._run(description, operation)

    async def _run(self, description: str, operation: WriteOperation) -> None:
        try:
            await operation()
            logger.debug(f"Persisted: {description}")
        except TransportFailure as e:
            self._report(description, e)
        except Exception as e:
            # Unexpected connector errors are reported the same way
            failure = TransportFailure(str(e))
            failure.__cause__ = e
            self._report(description, failure)

    def _report(self, description: str, error: TransportFailure) -> None:
        self.failure_count += 1
        logger.error(f"Durable write failed ({description}): {error}")
        self.failures.next(WriteFailure(description=description, error=error))
        if self.alerts:
            self.alerts.error("Sync Failed", f"Could not save {description}: {error}")
