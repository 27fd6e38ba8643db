# apply queued path steps to host agents
# src/pathfinding/mover.py
"""
Mover: host-side helpers that connect agents to a Pathfinder.

The Pathfinder only answers "where next"; these helpers are the thin
layer a host simulation uses to:
  - start a path from the agent's current position
  - apply the next step to `agent.pos`
  - drop an agent together with its stored path

Agents only need `id` and `pos` attributes (see PositionedAgent).
"""

from __future__ import annotations

from typing import MutableMapping, Optional

from .pathfinder import Pathfinder
from .types import AgentKey, Coord, Path, PositionedAgent


def set_target(agent: PositionedAgent, target: Coord, pathfinder: Pathfinder) -> Path:
    """Plan a path from the agent's current position to `target`."""
    return pathfinder.set_target(agent.id, current_coord(agent), target)


def move_agent(agent: PositionedAgent, pathfinder: Pathfinder) -> Optional[Coord]:
    """
    Move the agent one step along its stored path.

    If the agent has no path, or the path is used up, the agent does not
    move and None is returned.
    """
    step = pathfinder.advance(agent.id)
    if step is not None:
        agent.pos = step
    return step


def kill_agent(
    agent: PositionedAgent,
    pathfinder: Pathfinder,
    agents: Optional[MutableMapping[AgentKey, PositionedAgent]] = None,
) -> None:
    """
    Remove an agent's stored path and, if given, drop it from `agents`.

    Keeps the pathfinder free of paths for agents that no longer exist.
    """
    pathfinder.remove(agent.id)
    if agents is not None:
        agents.pop(agent.id, None)


def current_coord(agent: PositionedAgent) -> Coord:
    """Integer grid coordinate of the agent's position."""
    return tuple(int(c) for c in agent.pos)
