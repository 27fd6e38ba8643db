# shared coordinate / path aliases and the host agent protocol
# src/pathfinding/types.py

from __future__ import annotations

from collections import deque
from typing import Deque, Protocol, Tuple


# ---------------------------------------------------------------------------
# Grid aliases
# ---------------------------------------------------------------------------

# D-dimensional integer cell coordinate, 0-based
Coord = Tuple[int, ...]

# Grid extent along each axis
Dims = Tuple[int, ...]

# Caller-supplied agent identity
AgentKey = int

# Ordered cells from the one after the start up to and including the target.
# deque gives O(1) popleft while consuming and O(1) appendleft while rebuilding.
Path = Deque[Coord]


def empty_path() -> Path:
    """Return a fresh, empty Path."""
    return deque()


# ---------------------------------------------------------------------------
# Host-side agent shape
# ---------------------------------------------------------------------------

class PositionedAgent(Protocol):
    """
    Minimal agent shape the host-side helpers in pathfinding.mover need.

    The pathfinder never holds a reference to agents; it only stores
    paths keyed by `id`.
    """

    id: int
    pos: Coord
