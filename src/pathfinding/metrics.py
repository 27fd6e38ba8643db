# cost metrics estimating movement cost between grid cells
# src/pathfinding/metrics.py
"""
Cost metrics for A* over a D-dimensional grid.

Provides:
- CostMetric: protocol every metric implements (custom metrics included)
- DirectDistance: diagonal-aware step-cost metric (the default)
- Chebyshev: maximum coordinate difference
- HeightMap: base metric plus elevation difference
- position_delta / delta_cost: shared helpers used by metrics and find_path

Every metric is a pure function of (pathfinder configuration, start, end).
Periodicity is folded in by position_delta, so metrics never wrap
coordinates themselves.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Protocol, Sequence, Tuple, Union

import numpy as np

from .types import Coord, Dims

if TYPE_CHECKING:
    from .pathfinder import Pathfinder


# ---------------------------------------------------------------------------
# Metric interface
# ---------------------------------------------------------------------------

class CostMetric(Protocol):
    """
    Estimates the cost of travelling between two cells.

    To plug in a custom metric, implement `delta_cost` and pass an
    instance as `cost_metric` to Pathfinder. The same function is used
    for step costs between neighbours and for the heuristic, so it must
    return a nonnegative integer and should never overestimate the true
    cost if optimal paths are wanted.
    """

    def delta_cost(self, pathfinder: "Pathfinder", start: Coord, end: Coord) -> int:
        ...


def position_delta(pathfinder: "Pathfinder", start: Coord, end: Coord) -> Tuple[int, ...]:
    """
    Absolute per-axis difference between `start` and `end`.

    On a periodic grid each axis takes the shorter of the direct and the
    wrap-around distance.
    """
    direct = [abs(e - s) for s, e in zip(start, end)]
    if not pathfinder.periodic:
        return tuple(direct)
    return tuple(min(d, dim - d) for d, dim in zip(direct, pathfinder.dims))


# ---------------------------------------------------------------------------
# Built-in metrics
# ---------------------------------------------------------------------------

def default_direction_costs(ndims: int) -> Tuple[int, ...]:
    """floor(10 * sqrt(k)) for k = 1..ndims: 10, 14, 17, 20, ..."""
    return tuple(int(math.floor(10.0 * math.sqrt(k))) for k in range(1, ndims + 1))


@dataclass(frozen=True)
class DirectDistance:
    """
    Shortest unobstructed route cost when stepping between neighbours.

    `direction_costs[k - 1]` is the cost of one step along a k-dimensional
    diagonal (k axes changing at once). When left as None the Pathfinder
    fills in `default_direction_costs(D)`.

    With von Neumann movement only `direction_costs[0]` is used.
    """

    direction_costs: Optional[Tuple[int, ...]] = None

    @classmethod
    def for_dims(cls, ndims: int) -> "DirectDistance":
        return cls(default_direction_costs(ndims))

    def delta_cost(self, pathfinder: "Pathfinder", start: Coord, end: Coord) -> int:
        costs = self.direction_costs or default_direction_costs(len(start))
        delta = position_delta(pathfinder, start, end)

        if not pathfinder.moore_neighbors:
            return sum(delta) * costs[0]

        # Walk the sorted deltas from the smallest: the smallest axis delta is
        # covered by full D-diagonal steps, the remainder of the next one by
        # (D-1)-diagonal steps, and so on down to straight steps.
        ordered = sorted(delta)
        ndims = len(ordered)
        carry = 0
        total = 0
        for order in range(ndims, 0, -1):
            step = ordered[ndims - order]
            total += costs[order - 1] * (step - carry)
            carry = step
        return total

    def __str__(self) -> str:
        return "DirectDistance"


@dataclass(frozen=True)
class Chebyshev:
    """Maximum absolute coordinate difference."""

    def delta_cost(self, pathfinder: "Pathfinder", start: Coord, end: Coord) -> int:
        return max(position_delta(pathfinder, start, end))

    def __str__(self) -> str:
        return "Chebyshev"


@dataclass(frozen=True, eq=False)
class HeightMap:
    """
    Base metric cost plus the absolute height difference of the endpoints.

    `hmap` is an integer array with exactly the grid's shape; the
    Pathfinder rejects a mismatch at construction.
    """

    hmap: np.ndarray
    base_metric: Any = field(default_factory=DirectDistance)

    def delta_cost(self, pathfinder: "Pathfinder", start: Coord, end: Coord) -> int:
        climb = abs(int(self.hmap[end]) - int(self.hmap[start]))
        return self.base_metric.delta_cost(pathfinder, start, end) + climb

    def __str__(self) -> str:
        return f"HeightMap with base: {self.base_metric}"


MetricSpec = Union[CostMetric, type, None]


def resolve_metric(metric: MetricSpec, dims: Dims) -> CostMetric:
    """
    Turn a user-facing metric argument into a validated metric instance.

    Accepts None (DirectDistance with default costs), a metric class that
    can be built without arguments, or an instance. Raises ValueError on
    a cost table or height map that does not fit `dims`.
    """
    ndims = len(dims)

    if metric is None:
        return DirectDistance.for_dims(ndims)

    if isinstance(metric, type):
        if metric is DirectDistance:
            return DirectDistance.for_dims(ndims)
        if metric is HeightMap:
            raise ValueError("HeightMap needs a height array; pass HeightMap(hmap) instead")
        try:
            instance = metric()
        except TypeError as exc:
            raise ValueError(f"Cost metric class {metric.__name__} needs arguments") from exc
        return resolve_metric(instance, dims)

    if isinstance(metric, DirectDistance):
        if metric.direction_costs is None:
            return DirectDistance.for_dims(ndims)
        _check_direction_costs(metric.direction_costs, ndims)
        return metric

    if isinstance(metric, HeightMap):
        # no copy for an integer ndarray, so heightmap() returns the caller's array
        hmap = np.asarray(metric.hmap)
        if hmap.shape != tuple(dims):
            raise ValueError(
                f"Heightmap dimensions must be same as provided space: "
                f"{hmap.shape} != {tuple(dims)}"
            )
        if not np.issubdtype(hmap.dtype, np.integer):
            raise ValueError(f"Heightmap must hold integers, got dtype {hmap.dtype}")
        base = resolve_metric(metric.base_metric, dims)
        if base is not metric.base_metric or hmap is not metric.hmap:
            return HeightMap(hmap, base)
        return metric

    if not callable(getattr(metric, "delta_cost", None)):
        raise ValueError(f"Cost metric {metric!r} does not implement delta_cost()")
    return metric


def _check_direction_costs(costs: Sequence[int], ndims: int) -> None:
    if len(costs) != ndims:
        raise ValueError(
            f"DirectDistance needs one cost per diagonal order: "
            f"expected {ndims}, got {len(costs)}"
        )
    if any(c < 0 for c in costs):
        raise ValueError(f"Direction costs must be nonnegative, got {tuple(costs)}")


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def delta_cost(
    pathfinder: "Pathfinder",
    start: Coord,
    end: Coord,
    metric: Optional[CostMetric] = None,
) -> int:
    """
    Approximate cost of travelling from `start` to `end`.

    Uses `pathfinder.cost_metric` unless another metric is given. The
    metric is evaluated against the pathfinder's periodicity and
    neighbourhood kind.
    """
    chosen = metric if metric is not None else pathfinder.cost_metric
    return chosen.delta_cost(pathfinder, start, end)
