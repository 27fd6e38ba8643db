# src/pathfinding/__init__.py
"""
Grid pathfinding subsystem.

Provides:
- Pathfinder: grid configuration plus per-agent path store
- Cost metrics: DirectDistance, Chebyshev, HeightMap, CostMetric protocol
- A* pathfinding: find_path / search
- Neighborhoods: moore_neighborhood, vonneumann_neighborhood
- Mover: set_target / move_agent / kill_agent helpers for host agents
"""

from __future__ import annotations

from .astar import GridCell, PathfindingResult, find_path, search
from .metrics import (
    Chebyshev,
    CostMetric,
    DirectDistance,
    HeightMap,
    default_direction_costs,
    delta_cost,
    position_delta,
)
from .mover import current_coord, kill_agent, move_agent, set_target
from .neighborhood import moore_neighborhood, neighborhood_for, vonneumann_neighborhood
from .pathfinder import Pathfinder
from .types import AgentKey, Coord, Dims, Path, PositionedAgent

__all__ = [
    "Pathfinder",
    "CostMetric",
    "DirectDistance",
    "Chebyshev",
    "HeightMap",
    "default_direction_costs",
    "delta_cost",
    "position_delta",
    "GridCell",
    "PathfindingResult",
    "find_path",
    "search",
    "moore_neighborhood",
    "vonneumann_neighborhood",
    "neighborhood_for",
    "set_target",
    "move_agent",
    "kill_agent",
    "current_coord",
    "AgentKey",
    "Coord",
    "Dims",
    "Path",
    "PositionedAgent",
]
