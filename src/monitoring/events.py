# path: src/monitoring/events.py
"""
Event schemas for pathfinder monitoring.

This module defines:
- EventType enum
- MonitoringEvent (structured pathfinder events)

All events are JSON-serializable via `.to_dict()` and are intended
for use with monitoring.bus.EventBus and monitoring.logger.JsonFileLogger.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum, auto
from typing import Any, Dict, Optional


# ============================================================
# Event Types
# ============================================================

class EventType(Enum):
    """Typed monitoring events emitted by the pathfinder."""

    # A new path was stored for an agent (may be empty)
    PATH_SET = auto()

    # One queued coordinate was consumed
    PATH_ADVANCED = auto()

    # The last coordinate of a path was consumed
    PATH_ARRIVED = auto()

    # A stored path was dropped (agent left the simulation)
    PATH_REMOVED = auto()

    # set_target could not find a route
    SEARCH_FAILED = auto()


# ============================================================
# Monitoring Event Structure
# ============================================================

@dataclass
class MonitoringEvent:
    """
    Runtime event emitted by the pathfinder or a host-side helper.

    All fields must be JSON-safe.
    """

    ts: float                   # UNIX timestamp (seconds)
    module: str                 # Source module string ("pathfinding.pathfinder", ...)
    event_type: EventType       # Enum describing the event class
    message: str                # Short human-readable description
    payload: Dict[str, Any]     # Structured data (agent key, coordinates, costs)
    correlation_id: Optional[str] = None  # Used for grouping events per agent/run

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name  # store name, not enum
        return data
