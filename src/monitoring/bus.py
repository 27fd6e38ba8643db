# EventBus for monitoring events
"""
In-process pub/sub for pathfinder monitoring events.

- Subscribers receive MonitoringEvent objects.
- Used by:
    - JsonFileLogger
    - tests collecting events in memory
    - dev tools / scripts
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List

from .events import MonitoringEvent

logger = logging.getLogger(__name__)


SubscriberFn = Callable[[MonitoringEvent], None]


class EventBus:
    """
    Simple in-process event bus for monitoring events.

    Subscribers list is protected by a Lock; each publish iterates over a
    snapshot so subscribers may call back into the bus.
    """

    def __init__(self) -> None:
        self._subscribers: List[SubscriberFn] = []
        self._lock = Lock()

    def subscribe(self, fn: SubscriberFn) -> None:
        """Register a subscriber to receive MonitoringEvent instances."""
        with self._lock:
            self._subscribers.append(fn)

    def unsubscribe(self, fn: SubscriberFn) -> None:
        """
        Remove a previously registered subscriber.

        Safe to call even if `fn` is not present.
        """
        with self._lock:
            if fn in self._subscribers:
                self._subscribers.remove(fn)

    def publish(self, event: MonitoringEvent) -> None:
        """
        Publish a MonitoringEvent to all subscribers.

        A failing subscriber is logged and skipped so the others still
        receive the event.
        """
        with self._lock:
            subscribers = list(self._subscribers)

        for fn in subscribers:
            try:
                fn(event)
            except Exception:
                logger.exception("Monitoring subscriber %r failed", fn)

    def clear(self) -> None:
        """Drop all subscribers. Mostly useful for tests."""
        with self._lock:
            self._subscribers.clear()
