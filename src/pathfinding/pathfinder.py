# pathfinder configuration + per-agent path bookkeeping
# src/pathfinding/pathfinder.py
"""
Pathfinder: grid configuration and the per-agent path store.

Responsibilities:
- Hold the immutable search configuration (dims, periodicity,
  neighbourhood, admissibility, cost metric) and the walkable mask.
- Run find_path on behalf of the host and keep the resulting path per
  agent key.
- Hand out one coordinate per advance() call.

It does NOT:
- Move agents. The host applies the coordinate returned by advance().
- Track agent identity beyond the integer key it is given.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence, Tuple

import numpy as np

from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event

from .astar import PathfindingResult, find_path, search
from .metrics import HeightMap, MetricSpec, delta_cost, position_delta, resolve_metric
from .neighborhood import moore_neighborhood, vonneumann_neighborhood
from .types import AgentKey, Coord, Dims, Path

logger = logging.getLogger(__name__)

_MODULE = "pathfinding.pathfinder"


def _coord_payload(coord: Optional[Iterable[int]]) -> Optional[list]:
    """Plain-int list so monitoring payloads stay JSON-safe with numpy input."""
    if coord is None:
        return None
    return [int(c) for c in coord]


def _correlation(agent_key: AgentKey) -> str:
    """Events for one agent share a correlation id so a log can be split per agent."""
    return f"agent-{agent_key}"


class Pathfinder:
    """
    Stores path data of agents and the grid data A* searches over.

    Parameters
    ----------
    dims:
        Grid extent along each axis; its length is the dimension D.
    periodic:
        Whether every axis wraps around.
    moore_neighbors:
        Step to all 3^D - 1 Moore neighbours (True) or only the 2D von
        Neumann neighbours (False).
    admissibility:
        ε >= 0. Paths cost at most (1 + ε) times the optimum; larger values
        explore fewer cells. 0 always finds an optimal path.
    walkable:
        numpy bool array shaped like `dims`; False cells are never on a path.
        Defaults to all walkable. The array is kept without copying, so the
        host may edit it between searches. Any other dtype is rejected.
    cost_metric:
        A metric instance, a metric class buildable without arguments, or
        None for DirectDistance with default costs.
    bus:
        Optional EventBus; when set, path bookkeeping publishes
        MonitoringEvents.
    """

    def __init__(
        self,
        dims: Sequence[int],
        *,
        periodic: bool = False,
        moore_neighbors: bool = True,
        admissibility: float = 0.0,
        walkable: Optional[np.ndarray] = None,
        cost_metric: MetricSpec = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        dims = tuple(dims)
        if not dims or any(int(d) != d or d < 1 for d in dims):
            raise ValueError(f"Grid dimensions must be positive integers, got {dims}")
        dims = tuple(int(d) for d in dims)
        # NaN fails every comparison, so test for the valid range
        if not admissibility >= 0:
            raise ValueError(f"Invalid value for admissibility: {admissibility} ≱ 0")

        if walkable is None:
            walkable = np.ones(dims, dtype=bool)
        # Converting another dtype would copy, and host edits to the original
        # would never reach the search.
        if not isinstance(walkable, np.ndarray) or walkable.dtype != np.bool_:
            raise ValueError(
                f"Walkable map must be a bool numpy array, got "
                f"{getattr(walkable, 'dtype', type(walkable).__name__)}"
            )
        if walkable.shape != dims:
            raise ValueError(
                f"Walkable map dimensions must be same as provided space: "
                f"{tuple(np.shape(walkable))} != {dims}"
            )

        self._dims: Dims = dims
        self._periodic = bool(periodic)
        self._moore = bool(moore_neighbors)
        self._admissibility = float(admissibility)
        self._neighborhood = (
            moore_neighborhood(len(dims)) if self._moore else vonneumann_neighborhood(len(dims))
        )
        self._cost_metric = resolve_metric(cost_metric, dims)

        self.walkable: np.ndarray = walkable
        self.agent_paths: Dict[AgentKey, Path] = {}

        self._bus = bus

    # ------------------------------------------------------------------
    # Configuration (read-only after construction)
    # ------------------------------------------------------------------

    @property
    def dims(self) -> Dims:
        return self._dims

    @property
    def periodic(self) -> bool:
        return self._periodic

    @property
    def moore_neighbors(self) -> bool:
        return self._moore

    @property
    def neighborhood(self) -> Tuple[Coord, ...]:
        return self._neighborhood

    @property
    def admissibility(self) -> float:
        return self._admissibility

    @property
    def cost_metric(self):
        return self._cost_metric

    def __repr__(self) -> str:
        periodic = "periodic, " if self._periodic else ""
        moore = "moore, " if self._moore else ""
        return (
            f"A* in {len(self._dims)} dimensions. {periodic}{moore}"
            f"ϵ={self._admissibility}, metric={self._cost_metric}"
        )

    # ------------------------------------------------------------------
    # Search helpers
    # ------------------------------------------------------------------

    def position_delta(self, start: Coord, end: Coord) -> Tuple[int, ...]:
        return position_delta(self, start, end)

    def delta_cost(self, start: Coord, end: Coord, metric=None) -> int:
        return delta_cost(self, start, end, metric)

    def find_path(self, start: Coord, target: Coord) -> Path:
        return find_path(self, start, target)

    def search(self, start: Coord, target: Coord) -> PathfindingResult:
        return search(self, start, target)

    # ------------------------------------------------------------------
    # Path consumption API
    # ------------------------------------------------------------------

    def set_target(self, agent_key: AgentKey, start: Coord, target: Coord) -> Path:
        """
        Compute and store the path for `agent_key`, replacing any previous one.

        Returns the stored path. An empty path means the agent is already
        at `target` or no route exists.
        """
        result = search(self, start, target)
        self.agent_paths[agent_key] = result.path
        logger.debug(
            "Agent %s: %d-step path to %s (%s)",
            agent_key, len(result.path), target, result.reason or "ok",
        )

        if self._bus is not None:
            if not result.success:
                log_event(
                    bus=self._bus,
                    module=_MODULE,
                    correlation_id=_correlation(agent_key),
                    event_type=EventType.SEARCH_FAILED,
                    message="No route to target",
                    payload={
                        "agent": agent_key,
                        "start": _coord_payload(start),
                        "target": _coord_payload(target),
                        "expanded": result.expanded,
                    },
                )
            log_event(
                bus=self._bus,
                module=_MODULE,
                correlation_id=_correlation(agent_key),
                event_type=EventType.PATH_SET,
                message="Path stored",
                payload={
                    "agent": agent_key,
                    "target": _coord_payload(target),
                    "length": len(result.path),
                    "cost": result.cost,
                },
            )
        return result.path

    def is_stationary(self, agent_key: AgentKey) -> bool:
        """True if the agent has no stored path or has reached its target."""
        path = self.agent_paths.get(agent_key)
        return not path

    def advance(self, agent_key: AgentKey) -> Optional[Coord]:
        """
        Pop and return the agent's next coordinate, or None when stationary.

        The caller is responsible for actually moving the agent there.
        """
        path = self.agent_paths.get(agent_key)
        if not path:
            return None

        step = path.popleft()
        arrived = not path
        if arrived:
            del self.agent_paths[agent_key]

        if self._bus is not None:
            log_event(
                bus=self._bus,
                module=_MODULE,
                correlation_id=_correlation(agent_key),
                event_type=EventType.PATH_ARRIVED if arrived else EventType.PATH_ADVANCED,
                message="Agent arrived" if arrived else "Agent advanced",
                payload={
                    "agent": agent_key,
                    "pos": _coord_payload(step),
                    "remaining": len(path),
                },
            )
        return step

    def remove(self, agent_key: AgentKey) -> None:
        """Drop any stored path for `agent_key`. Unknown keys are ignored."""
        dropped = self.agent_paths.pop(agent_key, None)
        if dropped is not None and self._bus is not None:
            log_event(
                bus=self._bus,
                module=_MODULE,
                correlation_id=_correlation(agent_key),
                event_type=EventType.PATH_REMOVED,
                message="Path removed",
                payload={"agent": agent_key, "remaining": len(dropped)},
            )

    def path_of(self, agent_key: AgentKey) -> Tuple[Coord, ...]:
        """Read-only snapshot of the coordinates still queued for an agent."""
        return tuple(self.agent_paths.get(agent_key, ()))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def heightmap(self) -> Optional[np.ndarray]:
        """The height array when the HeightMap metric is in use, None otherwise."""
        if isinstance(self._cost_metric, HeightMap):
            return self._cost_metric.hmap
        return None

    def walkmap(self) -> np.ndarray:
        """The walkable mask searches run against."""
        return self.walkable
