# PathfinderConfig dataclass resolved from config/pathfinder.yaml
# src/env/schema.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


METRIC_DIRECT_DISTANCE = "direct_distance"
METRIC_CHEBYSHEV = "chebyshev"
METRIC_HEIGHT_MAP = "height_map"

KNOWN_METRICS = (METRIC_DIRECT_DISTANCE, METRIC_CHEBYSHEV, METRIC_HEIGHT_MAP)


@dataclass
class PathfinderConfig:
    """Resolved pathfinder settings for one active profile."""
    name: str
    dims: Tuple[int, ...]
    periodic: bool = False
    neighborhood: str = "moore"          # "moore" or "von_neumann"
    admissibility: float = 0.0
    metric: str = METRIC_DIRECT_DISTANCE
    direction_costs: Optional[Tuple[int, ...]] = None
    base_metric: str = METRIC_DIRECT_DISTANCE  # only used by height_map

    @property
    def moore_neighbors(self) -> bool:
        return self.neighborhood == "moore"
