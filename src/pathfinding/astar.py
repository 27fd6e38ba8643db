# weighted A* search over the pathfinder's grid
# src/pathfinding/astar.py
"""
A* pathfinding over a D-dimensional grid.

- Step costs and the heuristic both come from the pathfinder's cost metric.
- Admissibility ε weights the heuristic: f = round(g + (1 + ε) * h).
  ε = 0 gives cost-minimal paths; larger values expand fewer nodes.
- Frontier entries are (f, coord) tuples, so among equal f the
  lexicographically smallest coordinate is expanded first.
- The search is bounded by the number of walkable cells; it always
  terminates and never raises for unreachable targets.

All search state is local to one call; nothing here mutates the pathfinder.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Set, Tuple

from .metrics import delta_cost
from .types import Coord, Path, empty_path

if TYPE_CHECKING:
    from .pathfinder import Pathfinder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridCell:
    """Search bookkeeping for one visited cell."""

    f: int
    g: int
    h: int

    @classmethod
    def scored(cls, g: int, h: int, admissibility: float) -> "GridCell":
        return cls(f=round(g + (1 + admissibility) * h), g=g, h=h)


@dataclass
class PathfindingResult:
    """Structured result for a pathfinding attempt."""

    path: Path = field(default_factory=empty_path)
    success: bool = False
    reason: Optional[str] = None
    cost: int = 0       # accumulated metric cost of `path`
    expanded: int = 0   # number of cells closed during the search


def _neighbors(pathfinder: "Pathfinder", cur: Coord) -> Iterator[Coord]:
    if pathfinder.periodic:
        for offset in pathfinder.neighborhood:
            yield tuple((c + o) % d for c, o, d in zip(cur, offset, pathfinder.dims))
    else:
        for offset in pathfinder.neighborhood:
            yield tuple(c + o for c, o in zip(cur, offset))


def _passable(pathfinder: "Pathfinder", cell: Coord, closed: Set[Coord]) -> bool:
    # Bounds first: numpy would silently wrap negative indices.
    if not all(0 <= c < d for c, d in zip(cell, pathfinder.dims)):
        return False
    return bool(pathfinder.walkable[cell]) and cell not in closed


def search(pathfinder: "Pathfinder", start: Coord, target: Coord) -> PathfindingResult:
    """
    A* search from `start` to `target` on the pathfinder's grid.

    Returns a PathfindingResult with:
      - path: cells after `start` up to and including `target`, empty if
        there is no route or `start == target`
      - success: whether `target` was reached
      - reason: "already_at_target", "no_path_found", or None
      - cost: g-cost of `target` along the returned path
      - expanded: how many cells were closed
    """
    start = tuple(int(c) for c in start)
    target = tuple(int(c) for c in target)
    admissibility = pathfinder.admissibility

    grid: Dict[Coord, GridCell] = {}
    parent: Dict[Coord, Coord] = {}
    closed: Set[Coord] = set()

    grid[start] = GridCell.scored(0, delta_cost(pathfinder, start, target), admissibility)
    open_heap: List[Tuple[int, Coord]] = [(grid[start].f, start)]

    reached = False
    while open_heap:
        _, cur = heapq.heappop(open_heap)
        if cur in closed:
            # superseded entry; the cell was already expanded at a lower f
            continue
        if cur == target:
            reached = True
            break
        closed.add(cur)

        cur_g = grid[cur].g
        for nbor in _neighbors(pathfinder, cur):
            if not _passable(pathfinder, nbor, closed):
                continue

            new_g = cur_g + delta_cost(pathfinder, cur, nbor)
            known = grid.get(nbor)
            if known is None or new_g < known.g:
                parent[nbor] = cur
                cell = GridCell.scored(new_g, delta_cost(pathfinder, nbor, target), admissibility)
                grid[nbor] = cell
                heapq.heappush(open_heap, (cell.f, nbor))

    if not reached:
        logger.debug(
            "No path from %s to %s after expanding %d cells", start, target, len(closed)
        )
        return PathfindingResult(reason="no_path_found", expanded=len(closed))

    if start == target:
        return PathfindingResult(success=True, reason="already_at_target")

    path = _reconstruct_path(parent, target)
    logger.debug(
        "Path from %s to %s: %d steps, cost %d, %d cells expanded",
        start, target, len(path), grid[target].g, len(closed),
    )
    return PathfindingResult(
        path=path,
        success=True,
        cost=grid[target].g,
        expanded=len(closed),
    )


def _reconstruct_path(parent: Dict[Coord, Coord], target: Coord) -> Path:
    """Walk parent pointers back from `target`; the start cell is excluded."""
    path = empty_path()
    cur = target
    while cur in parent:
        path.appendleft(cur)
        cur = parent[cur]
    return path


def find_path(pathfinder: "Pathfinder", start: Coord, target: Coord) -> Path:
    """
    Shortest path (under the pathfinder's metric and ε) from `start` to `target`.

    An empty Path means no route exists or the agent is already there.
    Usually called through Pathfinder.set_target rather than directly.
    """
    return search(pathfinder, start, target).path
