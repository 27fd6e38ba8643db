# Path: tools/pathfinding_demo.py

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import numpy as np

from env.loader import build_pathfinder, load_pathfinder_config
from env.schema import METRIC_HEIGHT_MAP
from monitoring.bus import EventBus
from monitoring.logger import JsonFileLogger
from monitoring.logging_config import configure_logging
from pathfinding import Coord, Pathfinder, kill_agent, move_agent, set_target

logger = logging.getLogger("tools.pathfinding_demo")


@dataclass
class DemoAgent:
    """Bare host agent: an id and a grid position."""

    id: int
    pos: Coord


def random_walkable(rng: np.random.Generator, walkable: np.ndarray) -> Coord:
    cells = np.argwhere(walkable)
    return tuple(int(c) for c in cells[rng.integers(len(cells))])


def run(
    profile: Optional[str],
    agents: int,
    ticks: int,
    seed: int,
    obstacle_ratio: float,
    events_path: Optional[Path],
) -> None:
    """
    Tiny host loop: every agent walks to random targets, one cell per tick,
    and picks a new target whenever it arrives. Agents are removed at the end.
    """
    rng = np.random.default_rng(seed)
    config = load_pathfinder_config(profile=profile)

    walkable = rng.random(config.dims) >= obstacle_ratio
    hmap = rng.integers(0, 20, size=config.dims) if config.metric == METRIC_HEIGHT_MAP else None

    bus = EventBus()
    sink = JsonFileLogger(events_path, bus) if events_path is not None else None

    pathfinder: Pathfinder = build_pathfinder(config, walkable=walkable, hmap=hmap, bus=bus)
    logger.info("Built %r", pathfinder)

    population: Dict[int, DemoAgent] = {
        i: DemoAgent(id=i, pos=random_walkable(rng, walkable)) for i in range(agents)
    }

    arrivals = 0
    for tick in range(ticks):
        for agent in population.values():
            if pathfinder.is_stationary(agent.id):
                target = random_walkable(rng, walkable)
                path = set_target(agent, target, pathfinder)
                logger.debug("tick %d: agent %d -> %s (%d steps)", tick, agent.id, target, len(path))
            step = move_agent(agent, pathfinder)
            if step is not None and pathfinder.is_stationary(agent.id):
                arrivals += 1

    logger.info("%d ticks, %d agents, %d arrivals", ticks, agents, arrivals)

    for agent in list(population.values()):
        kill_agent(agent, pathfinder, population)

    if sink is not None:
        sink.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Walk a few agents around a pathfinder grid.")
    parser.add_argument("--profile", default=None, help="profile in config/pathfinder.yaml")
    parser.add_argument("--agents", type=int, default=3)
    parser.add_argument("--ticks", type=int, default=50)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--obstacles", type=float, default=0.2, help="fraction of blocked cells")
    parser.add_argument("--events", type=Path, default=None, help="write JSONL events here")
    parser.add_argument("--debug", action="store_true", help="log every search")
    args = parser.parse_args()

    configure_logging(trace_searches=args.debug)
    run(args.profile, args.agents, args.ticks, args.seed, args.obstacles, args.events)


if __name__ == "__main__":
    main()
