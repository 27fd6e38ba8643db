# src/monitoring/__init__.py
"""
Monitoring subsystem for the pathfinder.

Provides:
- EventBus: in-process pub/sub for MonitoringEvents
- EventType / MonitoringEvent: structured event schema
- JsonFileLogger / log_event: JSONL sink and publishing helper
- configure_logging: stdout logging setup for entrypoints
"""

from __future__ import annotations

from .bus import EventBus
from .events import EventType, MonitoringEvent
from .logger import JsonFileLogger, log_event
from .logging_config import configure_logging

__all__ = [
    "EventBus",
    "EventType",
    "MonitoringEvent",
    "JsonFileLogger",
    "log_event",
    "configure_logging",
]
