# src/env/__init__.py
"""
Configuration for the pathfinder: YAML profiles in config/pathfinder.yaml.
"""

from __future__ import annotations

from .loader import build_pathfinder, load_pathfinder_config
from .schema import PathfinderConfig

__all__ = ["PathfinderConfig", "build_pathfinder", "load_pathfinder_config"]
