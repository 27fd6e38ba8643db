# tests/test_pathfinder_api.py
"""
Tests for Pathfinder construction and the path consumption API.

Covers:
- Construction defaults and fail-fast validation
- set_target / is_stationary / advance / remove bookkeeping
- heightmap / walkmap accessors
- Host-side mover helpers
- Monitoring events published on a supplied bus
"""

from __future__ import annotations

import numpy as np
import pytest

from pathfinding import (
    Chebyshev,
    DirectDistance,
    HeightMap,
    Pathfinder,
    find_path,
    kill_agent,
    move_agent,
    set_target,
)
from tests.fakes.fake_agent import FakeAgent, RecordingBus


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

def test_defaults() -> None:
    pf = Pathfinder((4, 5))
    assert pf.dims == (4, 5)
    assert not pf.periodic
    assert pf.moore_neighbors
    assert len(pf.neighborhood) == 8
    assert pf.admissibility == 0.0
    assert pf.walkmap().shape == (4, 5)
    assert pf.walkmap().all()
    assert isinstance(pf.cost_metric, DirectDistance)
    assert pf.cost_metric.direction_costs == (10, 14)
    assert pf.heightmap() is None


def test_repr_summarises_configuration() -> None:
    pf = Pathfinder((10, 10), periodic=True)
    assert repr(pf) == "A* in 2 dimensions. periodic, moore, ϵ=0.0, metric=DirectDistance"


def test_metric_class_is_instantiated() -> None:
    pf = Pathfinder((6, 6, 6), cost_metric=DirectDistance)
    assert pf.cost_metric.direction_costs == (10, 14, 17)
    assert isinstance(Pathfinder((6, 6), cost_metric=Chebyshev).cost_metric, Chebyshev)


def test_negative_admissibility_rejected() -> None:
    with pytest.raises(ValueError):
        Pathfinder((10, 10), admissibility=-0.1)


def test_walkable_shape_mismatch_rejected() -> None:
    with pytest.raises(ValueError):
        Pathfinder((10, 10), walkable=np.ones((10, 9), dtype=bool))


def test_heightmap_shape_mismatch_rejected() -> None:
    with pytest.raises(ValueError, match="Heightmap dimensions"):
        Pathfinder((10, 10), cost_metric=HeightMap(np.zeros((9, 10), dtype=int)))


def test_direction_cost_table_length_rejected() -> None:
    with pytest.raises(ValueError):
        Pathfinder((10, 10), cost_metric=DirectDistance((10,)))


@pytest.mark.parametrize("dims", [(), (0, 4), (3, -1), (2.5, 4), (4, 3.9)])
def test_bad_dimensions_rejected(dims) -> None:
    with pytest.raises(ValueError):
        Pathfinder(dims)


def test_integral_float_and_numpy_dims_accepted() -> None:
    pf = Pathfinder((np.int64(4), 5.0))
    assert pf.dims == (4, 5)
    assert all(type(d) is int for d in pf.dims)


def test_nan_admissibility_rejected() -> None:
    with pytest.raises(ValueError):
        Pathfinder((10, 10), admissibility=float("nan"))


@pytest.mark.parametrize(
    "walkable",
    [np.ones((4, 4), dtype=int), np.ones((4, 4)), [[True] * 4] * 4],
    ids=["int", "float", "list"],
)
def test_non_bool_walkable_rejected(walkable) -> None:
    with pytest.raises(ValueError, match="bool numpy array"):
        Pathfinder((4, 4), walkable=walkable)


def test_host_edits_to_walkable_reach_later_searches() -> None:
    wlk = np.ones((5, 5), dtype=bool)
    pf = Pathfinder((5, 5), walkable=wlk)
    assert pf.search((0, 0), (0, 4)).success

    wlk[:, 2] = False
    result = pf.search((0, 0), (0, 4))
    assert not result.success
    assert result.reason == "no_path_found"


def test_heightmap_from_nested_lists_is_normalised() -> None:
    pf = Pathfinder((4, 4), cost_metric=HeightMap([[0] * 4 for _ in range(4)]))
    assert isinstance(pf.heightmap(), np.ndarray)
    assert pf.heightmap().shape == (4, 4)
    assert list(pf.find_path((0, 0), (3, 3))) == [(1, 1), (2, 2), (3, 3)]


def test_float_heightmap_rejected() -> None:
    with pytest.raises(ValueError, match="integers"):
        Pathfinder((4, 4), cost_metric=HeightMap(np.zeros((4, 4))))


def test_heightmap_class_without_array_rejected() -> None:
    with pytest.raises(ValueError, match="height array"):
        Pathfinder((4, 4), cost_metric=HeightMap)


def test_metric_class_needing_arguments_rejected() -> None:
    class Scaled:
        def __init__(self, factor: int) -> None:
            self.factor = factor

        def delta_cost(self, pathfinder, start, end) -> int:
            return self.factor * max(pathfinder.position_delta(start, end))

    with pytest.raises(ValueError, match="needs arguments"):
        Pathfinder((4, 4), cost_metric=Scaled)


def test_accessors_expose_live_arrays() -> None:
    hmap = np.arange(16).reshape(4, 4)
    wlk = np.ones((4, 4), dtype=bool)
    pf = Pathfinder((4, 4), walkable=wlk, cost_metric=HeightMap(hmap))
    assert pf.heightmap() is hmap
    assert pf.walkmap() is wlk


# ---------------------------------------------------------------------------
# Path consumption
# ---------------------------------------------------------------------------

def test_unknown_agent_is_stationary() -> None:
    pf = Pathfinder((10, 10))
    assert pf.is_stationary(42)
    assert pf.advance(42) is None
    pf.remove(42)  # no error
    assert pf.path_of(42) == ()


def test_advance_replays_find_path() -> None:
    pf = Pathfinder((10, 10))
    expected = list(find_path(pf, (1, 1), (7, 3)))

    pf.set_target(1, (1, 1), (7, 3))
    assert not pf.is_stationary(1)
    assert list(pf.path_of(1)) == expected

    walked = []
    while not pf.is_stationary(1):
        walked.append(pf.advance(1))

    assert walked == expected
    assert pf.advance(1) is None
    assert 1 not in pf.agent_paths


def test_set_target_overwrites_previous_path() -> None:
    pf = Pathfinder((10, 10))
    pf.set_target(1, (0, 0), (9, 9))
    pf.advance(1)
    pf.set_target(1, (1, 1), (1, 4))
    assert list(pf.path_of(1)) == [(1, 2), (1, 3), (1, 4)]


def test_set_target_to_current_cell_is_stationary() -> None:
    pf = Pathfinder((10, 10))
    path = pf.set_target(3, (2, 2), (2, 2))
    assert len(path) == 0
    assert pf.is_stationary(3)


def test_remove_drops_path() -> None:
    pf = Pathfinder((10, 10))
    pf.set_target(5, (0, 0), (5, 5))
    pf.remove(5)
    assert pf.is_stationary(5)
    assert 5 not in pf.agent_paths


def test_agents_are_independent() -> None:
    pf = Pathfinder((10, 10))
    pf.set_target(1, (0, 0), (0, 3))
    pf.set_target(2, (9, 9), (6, 9))
    assert pf.advance(1) == (0, 1)
    assert pf.advance(2) == (8, 9)
    pf.remove(1)
    assert pf.advance(2) == (7, 9)


# ---------------------------------------------------------------------------
# Mover helpers
# ---------------------------------------------------------------------------

def test_move_agent_walks_to_target() -> None:
    pf = Pathfinder((10, 10))
    agent = FakeAgent(id=7, pos=(0, 0))
    set_target(agent, (3, 4), pf)

    steps = 0
    while move_agent(agent, pf) is not None:
        steps += 1

    assert agent.pos == (3, 4)
    assert steps == 4
    assert pf.is_stationary(agent.id)


def test_move_agent_without_path_does_not_move() -> None:
    pf = Pathfinder((10, 10))
    agent = FakeAgent(id=1, pos=(5, 5))
    assert move_agent(agent, pf) is None
    assert agent.pos == (5, 5)


def test_kill_agent_removes_path_and_agent() -> None:
    pf = Pathfinder((10, 10))
    agent = FakeAgent(id=2, pos=(0, 0))
    agents = {agent.id: agent}
    set_target(agent, (9, 9), pf)

    kill_agent(agent, pf, agents)

    assert agents == {}
    assert agent.id not in pf.agent_paths


# ---------------------------------------------------------------------------
# Monitoring
# ---------------------------------------------------------------------------

def test_events_follow_path_lifecycle() -> None:
    bus = RecordingBus()
    pf = Pathfinder((10, 10), bus=bus)

    pf.set_target(1, (0, 0), (0, 2))
    pf.advance(1)
    pf.advance(1)
    pf.advance(1)  # stationary: no event

    assert bus.types() == ["PATH_SET", "PATH_ADVANCED", "PATH_ARRIVED"]
    assert bus.events[0].payload == {"agent": 1, "target": [0, 2], "length": 2, "cost": 20}
    assert bus.events[-1].payload["pos"] == [0, 2]


def test_events_are_correlated_per_agent() -> None:
    bus = RecordingBus()
    pf = Pathfinder((10, 10), bus=bus)

    pf.set_target(1, (0, 0), (0, 2))
    pf.set_target(2, (5, 5), (5, 6))
    pf.advance(2)
    pf.advance(1)
    pf.remove(1)

    by_agent = {}
    for event in bus.events:
        by_agent.setdefault(event.correlation_id, []).append(event.event_type.name)
    assert by_agent == {
        "agent-1": ["PATH_SET", "PATH_ADVANCED", "PATH_REMOVED"],
        "agent-2": ["PATH_SET", "PATH_ARRIVED"],
    }


def test_failed_search_and_removal_events() -> None:
    bus = RecordingBus()
    wlk = np.ones((5, 5), dtype=bool)
    wlk[:, 2] = False
    pf = Pathfinder((5, 5), walkable=wlk, bus=bus)

    pf.set_target(1, (0, 0), (0, 4))
    pf.remove(1)  # empty path stored; still removed
    pf.remove(1)  # nothing left: no event

    assert bus.types() == ["SEARCH_FAILED", "PATH_SET", "PATH_REMOVED"]
    assert bus.events[0].payload["expanded"] == 10


def test_numpy_coordinates_are_json_safe() -> None:
    bus = RecordingBus()
    pf = Pathfinder((10, 10), bus=bus)
    start = tuple(np.array([0, 0]))
    target = tuple(np.array([0, 3]))
    pf.set_target(1, start, target)
    assert all(type(c) is int for c in bus.events[0].payload["target"])
