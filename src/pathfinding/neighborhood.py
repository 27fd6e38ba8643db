# offset sets defining which cells are adjacent
# src/pathfinding/neighborhood.py
"""
Neighborhood generators for D-dimensional grids.

- moore_neighborhood(D): every offset in {-1, 0, 1}^D except the zero vector.
- vonneumann_neighborhood(D): offsets with exactly one nonzero component.

Offsets are ordered with the first axis varying fastest. find_path keeps
the first parent it sees among equal-cost relaxations, so this order is
part of what makes returned paths reproducible.
"""

from __future__ import annotations

from itertools import product
from typing import Tuple

from .types import Coord

Neighborhood = Tuple[Coord, ...]

MOORE = "moore"
VON_NEUMANN = "von_neumann"


def _hypercube(dims: int) -> list[Coord]:
    """All offsets in {-1, 0, 1}^dims, first axis varying fastest."""
    if dims < 1:
        raise ValueError(f"Neighborhood dimension must be >= 1, got {dims}")
    # product() varies the last axis fastest; reversing each tuple flips that.
    return [tuple(reversed(offset)) for offset in product((-1, 0, 1), repeat=dims)]


def moore_neighborhood(dims: int) -> Neighborhood:
    """Return the 3^D - 1 diagonal-inclusive offsets."""
    return tuple(o for o in _hypercube(dims) if any(o))


def vonneumann_neighborhood(dims: int) -> Neighborhood:
    """Return the 2D axis-aligned offsets."""
    return tuple(o for o in _hypercube(dims) if sum(abs(c) for c in o) == 1)


def neighborhood_for(kind: str, dims: int) -> Neighborhood:
    """Resolve a neighborhood name ("moore" / "von_neumann") to its offsets."""
    if kind == MOORE:
        return moore_neighborhood(dims)
    if kind == VON_NEUMANN:
        return vonneumann_neighborhood(dims)
    raise ValueError(f"Unknown neighborhood kind: {kind!r}")
