# src/env/loader.py
"""
Load pathfinder settings from config/pathfinder.yaml.

The file holds an active `profile` name and a `profiles` mapping:

    profile: default
    profiles:
      default:
        dims: [10, 10]
        periodic: false
        neighborhood: moore
        admissibility: 0.0
        metric: direct_distance

build_pathfinder() turns a resolved PathfinderConfig into a Pathfinder.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import numpy as np
import yaml

from monitoring.bus import EventBus
from pathfinding.metrics import Chebyshev, CostMetric, DirectDistance, HeightMap
from pathfinding.neighborhood import MOORE, neighborhood_for
from pathfinding.pathfinder import Pathfinder

from .schema import (
    KNOWN_METRICS,
    METRIC_CHEBYSHEV,
    METRIC_DIRECT_DISTANCE,
    METRIC_HEIGHT_MAP,
    PathfinderConfig,
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_CONFIG = CONFIG_ROOT / "pathfinder.yaml"


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping from `path`."""
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data)}")
    return data


def _select_profile(cfg: Dict[str, Any], override: Optional[str]) -> Tuple[str, Dict[str, Any]]:
    """Return (active_profile_name, active_profile_mapping)."""
    profile_name = override or cfg.get("profile")
    if not profile_name:
        raise ValueError("pathfinder.yaml must define a 'profile' key.")
    profiles = cfg.get("profiles")
    if not isinstance(profiles, dict):
        raise ValueError("pathfinder.yaml must define a 'profiles' mapping.")
    if profile_name not in profiles:
        raise KeyError(f"Profile '{profile_name}' not found in pathfinder.yaml profiles.")
    return profile_name, profiles[profile_name] or {}


def _validate_config(config: PathfinderConfig) -> None:
    """Basic sanity checks; Pathfinder re-checks shapes when it is built."""
    if not config.dims or any(int(d) != d or d < 1 for d in config.dims):
        raise ValueError(
            f"Profile '{config.name}': dims must be positive integers, got {config.dims}"
        )
    try:
        neighborhood_for(config.neighborhood, len(config.dims))
    except ValueError as exc:
        raise ValueError(f"Profile '{config.name}': {exc}") from exc
    if not config.admissibility >= 0:
        raise ValueError(
            f"Profile '{config.name}': admissibility must be >= 0, got {config.admissibility}"
        )
    for label, metric in (("metric", config.metric), ("base_metric", config.base_metric)):
        if metric not in KNOWN_METRICS:
            raise ValueError(f"Profile '{config.name}': unknown {label} '{metric}'")
    if config.base_metric == METRIC_HEIGHT_MAP:
        raise ValueError(f"Profile '{config.name}': base_metric cannot be height_map")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_pathfinder_config(
    path: Optional[Path] = None,
    profile: Optional[str] = None,
) -> PathfinderConfig:
    """Main entry point: returns the resolved PathfinderConfig."""
    cfg = _load_yaml(Path(path) if path is not None else DEFAULT_CONFIG)
    name, raw = _select_profile(cfg, profile)

    if "dims" not in raw:
        raise KeyError(f"Profile '{name}' must define 'dims'.")

    costs = raw.get("direction_costs")
    config = PathfinderConfig(
        name=name,
        dims=tuple(raw["dims"]),
        periodic=bool(raw.get("periodic", False)),
        neighborhood=raw.get("neighborhood", MOORE),
        admissibility=float(raw.get("admissibility", 0.0)),
        metric=raw.get("metric", METRIC_DIRECT_DISTANCE),
        direction_costs=tuple(int(c) for c in costs) if costs is not None else None,
        base_metric=raw.get("base_metric", METRIC_DIRECT_DISTANCE),
    )

    _validate_config(config)
    config.dims = tuple(int(d) for d in config.dims)
    return config


def _simple_metric(name: str, config: PathfinderConfig) -> CostMetric:
    if name == METRIC_CHEBYSHEV:
        return Chebyshev()
    return DirectDistance(config.direction_costs)


def build_pathfinder(
    config: PathfinderConfig,
    walkable: Optional[np.ndarray] = None,
    hmap: Optional[np.ndarray] = None,
    bus: Optional[EventBus] = None,
) -> Pathfinder:
    """
    Construct a Pathfinder from a resolved config.

    `hmap` is required when the profile uses the height_map metric.
    """
    if config.metric == METRIC_HEIGHT_MAP:
        if hmap is None:
            raise ValueError(f"Profile '{config.name}' uses height_map but no hmap was given")
        metric: CostMetric = HeightMap(hmap, _simple_metric(config.base_metric, config))
    else:
        metric = _simple_metric(config.metric, config)

    return Pathfinder(
        config.dims,
        periodic=config.periodic,
        moore_neighbors=config.moore_neighbors,
        admissibility=config.admissibility,
        walkable=walkable,
        cost_metric=metric,
        bus=bus,
    )
