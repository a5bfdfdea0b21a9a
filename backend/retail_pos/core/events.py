"""
Publish/subscribe primitive used by stores, the auth context and alerts.

A BehaviorSubject keeps the most recent value and replays it to every new
listener, then pushes each later value to all attached listeners in the
order they were published.
"""
import itertools
import logging
from typing import Callable, Dict, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]


class Subscription:
    """Handle returned by subscribe(); call unsubscribe() to detach"""

    def __init__(self, detach: Callable[[], None]):
        self._detach = detach
        self.closed = False

    def unsubscribe(self) -> None:
        if not self.closed:
            self._detach()
            self.closed = True


class BehaviorSubject(Generic[T]):
    """Multicast value holder with replay-latest semantics"""

    def __init__(self, initial: T):
        self._value = initial
        self._listeners: Dict[int, Listener] = {}
        self._ids = itertools.count()

    @property
    def value(self) -> T:
        return self._value

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Subscription:
        """Attach a listener; it receives the current value immediately"""
        key = next(self._ids)
        self._listeners[key] = listener
        self._deliver(listener, self._value)
        return Subscription(lambda: self._listeners.pop(key, None))

    def next(self, value: T) -> None:
        self._value = value
        # Copy so listeners may detach while being notified
        for listener in list(self._listeners.values()):
            self._deliver(listener, value)

    def _deliver(self, listener: Listener, value: T) -> None:
        try:
            listener(value)
        except Exception:
            # A broken observer must not abort the publisher's mutation
            logger.exception("Listener %r failed while handling a notification", listener)
