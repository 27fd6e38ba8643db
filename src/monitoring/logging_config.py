# src/monitoring/logging_config.py
"""
Central logging configuration for pathfinder hosts and tools.

Call configure_logging() from your main entrypoint once, for example:

    from monitoring.logging_config import configure_logging
    configure_logging(trace_searches=True)

With trace_searches enabled, per-search diagnostics from pathfinding.astar
(expanded cells, path length, cost) are emitted at DEBUG level.
"""

from __future__ import annotations

import logging
import sys

SEARCH_LOGGER = "pathfinding.astar"


def configure_logging(level: int = logging.INFO, trace_searches: bool = False) -> None:
    """
    Configure root logging if no handlers are attached yet.

    Args:
        level: default logging level (e.g., logging.INFO, logging.DEBUG)
        trace_searches: also emit per-search DEBUG lines from the A* module
    """
    if trace_searches:
        logging.getLogger(SEARCH_LOGGER).setLevel(logging.DEBUG)

    root = logging.getLogger()

    # Don't duplicate handlers if someone already configured logging.
    if root.handlers:
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(
        logging.Formatter(fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(level)
