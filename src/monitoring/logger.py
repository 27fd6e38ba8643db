# JSONL sink for pathfinder events
"""
Writes pathfinder MonitoringEvents to disk and publishes new ones.

A JsonFileLogger listens on an EventBus and appends every event it sees
as one JSON object per line. Attach one to the bus handed to a
Pathfinder to get a replayable record of path bookkeeping:

    bus = EventBus()
    sink = JsonFileLogger(Path("logs/pathfinding/events.log"), bus)
    pf = Pathfinder((10, 10), bus=bus)
    pf.set_target(1, (0, 0), (9, 9))
    sink.close()

log_event() stamps and publishes a single event; Pathfinder uses it for
PATH_* and SEARCH_FAILED events.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

from .bus import EventBus
from .events import EventType, MonitoringEvent

logger = logging.getLogger(__name__)


class JsonFileLogger:
    """
    Appends every event published on `bus` to `path`, one JSON line each.

    Missing parent directories are created. The file is opened once and
    kept open until close().
    """

    def __init__(self, path: Path, bus: EventBus) -> None:
        self._path = path
        self._bus = bus
        path.parent.mkdir(parents=True, exist_ok=True)
        self._file = path.open("a", encoding="utf-8")
        bus.subscribe(self._on_event)

    def _on_event(self, event: MonitoringEvent) -> None:
        line = json.dumps(event.to_dict(), ensure_ascii=False)
        try:
            self._file.write(line + "\n")
            self._file.flush()
        except OSError:
            # a full disk must not stop the host loop; the line is dropped
            logger.warning("Could not write monitoring event to %s", self._path, exc_info=True)

    def close(self) -> None:
        """Stop listening and close the file. Later events are not written."""
        self._bus.unsubscribe(self._on_event)
        self._file.close()


def log_event(
    bus: EventBus,
    module: str,
    event_type: EventType,
    message: str,
    payload: Optional[Dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> None:
    """
    Build a MonitoringEvent stamped with the current time and publish it.

    `payload` must be JSON-safe (plain ints and lists, not numpy scalars).
    `correlation_id` groups events that belong together; the Pathfinder
    sets it to the agent the event concerns.
    """
    event = MonitoringEvent(
        ts=time.time(),
        module=module,
        event_type=event_type,
        message=message,
        payload=payload or {},
        correlation_id=correlation_id,
    )
    bus.publish(event)
