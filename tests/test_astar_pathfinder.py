"""
Tests for A* pathfinding over gravity states.
"""

import pytest

from gravnav.exceptions import InvalidState
from gravnav.graph.gravity import GravityDirection
from gravnav.graph.navigation_types import MoveKind, State
from gravnav.graph.reachability import ReachabilityAnalyzer, StateGraph
from gravnav.graph.tile_grid import GridModel
from gravnav.nav_config import NavigationConfig
from gravnav.pathfinding import GravityAStar

DOWN = GravityDirection.DOWN
UP = GravityDirection.UP

TEST_PROFILE = NavigationConfig(
    gravity_accel=0.125,
    jump_strengths=(0.5,),
    lateral_speeds=(-0.25, 0.0, 0.25),
    max_fall_speed=1.0,
    max_jump_steps=32,
)

FLAT = ("..........", "..........", "##########")
GAP = ("..........", "..........", "#####.####")
TUNNEL = ("###", "...", "###")
ISLAND = (
    "..........",
    "........#.",
    "..........",
    "..........",
    "##########",
)
ROOM = (
    "########",
    "#......#",
    "#..##..#",
    "#......#",
    "#.#....#",
    "########",
)


def make_pathfinder(lines, config=TEST_PROFILE):
    return GravityAStar(GridModel([list(line) for line in lines], ["#"]), config)


class TestGravityAStar:
    """Goal-directed search."""

    def test_straight_walk(self):
        path = make_pathfinder(FLAT).find_path(State(0, 1, DOWN), 9, 1)
        assert path is not None
        assert len(path) == 9
        assert all(move.kind is MoveKind.WALK for move in path)
        assert path.total_cost == 9
        assert path.end == State(9, 1, DOWN)

    def test_jump_over_gap(self):
        path = make_pathfinder(GAP).find_path(State(0, 1, DOWN), 9, 1)
        assert path is not None
        kinds = [move.kind for move in path]
        assert kinds == [MoveKind.WALK] * 4 + [MoveKind.JUMP] + [MoveKind.WALK] * 3

        jump = path[4]
        assert jump.from_state == State(4, 1, DOWN)
        assert jump.to_state == State(6, 1, DOWN)
        assert jump.cost == len(jump.trajectory) == 8
        assert path.total_cost == 15

    def test_start_is_goal(self):
        path = make_pathfinder(FLAT).find_path(State(3, 1, DOWN), 3, 1)
        assert path is not None
        assert len(path) == 0
        assert path.total_cost == 0

    def test_unreachable_goal(self):
        pathfinder = make_pathfinder(ISLAND, NavigationConfig())
        assert pathfinder.find_path(State(0, 3, DOWN), 8, 0) is None

    def test_start_not_standing(self):
        with pytest.raises(InvalidState):
            make_pathfinder(GAP).find_path(State(5, 1, DOWN), 9, 1)

    def test_start_out_of_bounds(self):
        with pytest.raises(InvalidState):
            make_pathfinder(GAP).find_path(State(-1, 1, DOWN), 9, 1)

    def test_goal_out_of_bounds(self):
        with pytest.raises(InvalidState):
            make_pathfinder(GAP).find_path(State(0, 1, DOWN), 10, 1)

    def test_goal_gravity(self):
        pathfinder = make_pathfinder(TUNNEL)
        any_gravity = pathfinder.find_path(State(0, 1, DOWN), 1, 1)
        assert any_gravity.end == State(1, 1, DOWN)
        assert any_gravity.total_cost == 1

        on_ceiling = pathfinder.find_path(State(0, 1, DOWN), 1, 1, goal_gravity=UP)
        assert on_ceiling.end == State(1, 1, UP)
        assert on_ceiling.total_cost == 3

    def test_deterministic(self):
        first = make_pathfinder(GAP).find_path(State(0, 1, DOWN), 9, 1)
        second = make_pathfinder(GAP).find_path(State(0, 1, DOWN), 9, 1)
        assert first == second

    def test_cost_matches_reachability(self):
        grid = GridModel([list(line) for line in ROOM], ["#"])
        graph = StateGraph(grid)
        pathfinder = GravityAStar(grid, state_graph=graph)
        start = State(2, 3, DOWN)

        result = ReachabilityAnalyzer(grid, state_graph=graph).analyze(start)
        for cell in result.as_list():
            path = pathfinder.find_path(start, cell.state.x, cell.state.y, cell.state.gravity)
            assert path is not None
            assert path.end == cell.state
            assert path.total_cost == cell.cost
