"""
Tests for path descriptions and level statistics.
"""

from gravnav.analysis import describe_path, get_navigation_stats
from gravnav.analysis.navigation_diagnostics import NO_PATH_TEXT, describe_move
from gravnav.graph.gravity import GravityDirection
from gravnav.graph.navigation_types import JumpVariant, Move, MoveKind, Path, State
from gravnav.graph.reachability import PhysicsMovement, StateGraph
from gravnav.graph.tile_grid import GridModel
from gravnav.nav_config import NavigationConfig
from gravnav.pathfinding import GravityAStar

DOWN = GravityDirection.DOWN
UP = GravityDirection.UP
LEFT = GravityDirection.LEFT

TEST_PROFILE = NavigationConfig(
    gravity_accel=0.125,
    jump_strengths=(0.5,),
    lateral_speeds=(-0.25, 0.0, 0.25),
    max_fall_speed=1.0,
    max_jump_steps=32,
)

FLAT = ("..........", "..........", "##########")
GAP = ("..........", "..........", "#####.####")
ISLAND = (
    "..........",
    "........#.",
    "..........",
    "..........",
    "##########",
)


def make_grid(lines):
    return GridModel([list(line) for line in lines], ["#"])


class TestDescribePath:
    """Human-readable path rendering."""

    def test_no_path(self):
        assert describe_path(None) == NO_PATH_TEXT

    def test_empty_path_differs_from_no_path(self):
        text = describe_path(Path(State(3, 1, DOWN)))
        assert text != NO_PATH_TEXT
        assert "no movement needed" in text
        assert "(3, 1)" in text

    def test_gap_path(self):
        path = GravityAStar(make_grid(GAP), TEST_PROFILE).find_path(
            State(0, 1, DOWN), 9, 1
        )
        lines = describe_path(path).splitlines()
        assert lines[0] == "Start at (0, 1) with gravity DOWN"
        assert lines[1] == "1. walk right to (1, 1)"
        assert lines[5] == "5. jump up-right landing on floor at (6, 1)"
        assert lines[-1] == "Total cost: 15"
        assert len(lines) == len(path) + 2


class TestDescribeMove:
    """Per-primitive wording."""

    def test_fall(self):
        movement = PhysicsMovement(
            make_grid((".....", ".....", "##...", ".....", "#####")), TEST_PROFILE
        )
        (fall,) = movement.get_fall_moves(State(1, 1, DOWN))
        assert describe_move(fall) == "fall 2 to (2, 3)"

    def test_side_landing(self):
        movement = PhysicsMovement(
            make_grid(("......", "....#.", "######")), TEST_PROFILE
        )
        move = movement.simulate_jump(State(2, 1, DOWN), JumpVariant(0.5, 0.25))
        assert describe_move(move) == "jump up-right landing on right wall at (3, 1)"

    def test_ceiling_landing(self):
        movement = PhysicsMovement(make_grid(("###", "...", "###")), TEST_PROFILE)
        move = movement.simulate_jump(State(1, 1, DOWN), JumpVariant(0.5, 0.0))
        assert describe_move(move) == "jump up landing on ceiling at (1, 1)"

    def test_walk_on_wall(self):
        move = Move(State(1, 2, LEFT), State(1, 3, LEFT), MoveKind.WALK, 1)
        assert describe_move(move) == "walk down to (1, 3)"


class TestNavigationStats:
    """Level-wide statistics."""

    def test_flat_level(self):
        stats = get_navigation_stats(StateGraph(make_grid(FLAT), TEST_PROFILE))
        assert stats.total_states == 10
        assert stats.by_gravity == {"DOWN": 10, "UP": 0, "LEFT": 0, "RIGHT": 0}
        assert stats.walkable_area == 10
        assert stats.canonical_start == State(0, 1, DOWN)
        assert stats.reachable_from_start == 10
        assert stats.reachable_fraction == 1.0
        assert stats.sampled_starts == 10
        assert stats.mean_reachable_fraction == 1.0
        assert stats.component_count == 1
        assert stats.largest_component == 10
        assert stats.grid_size == (10, 3)

    def test_gap_walls_form_their_own_component(self):
        stats = get_navigation_stats(StateGraph(make_grid(GAP), TEST_PROFILE))
        # The gap's side walls hold (5, 2, LEFT) and (5, 2, RIGHT); falls out
        # of them leave the grid and jumps only swap between the two
        assert stats.total_states == 11
        assert stats.by_gravity == {"DOWN": 9, "UP": 0, "LEFT": 1, "RIGHT": 1}
        assert stats.reachable_from_start == 9
        assert stats.component_count == 2
        assert stats.largest_component == 9

    def test_island_level(self):
        stats = get_navigation_stats(StateGraph(make_grid(ISLAND)), sample_size=3)
        assert stats.total_states == 14
        assert stats.by_gravity == {"DOWN": 11, "UP": 1, "LEFT": 1, "RIGHT": 1}
        assert stats.walkable_area == 14
        assert stats.canonical_start == State(8, 0, DOWN)
        # The island top drops to the ground but nothing climbs back
        assert stats.reachable_from_start == 11
        assert stats.reachable_fraction == 11 / 14
        assert stats.sampled_starts == 3
        assert stats.component_count > 1

    def test_level_without_surfaces(self):
        stats = get_navigation_stats(StateGraph(make_grid(("...", "..."))))
        assert stats.total_states == 0
        assert stats.canonical_start is None
        assert stats.reachable_fraction == 0.0
        assert stats.component_count == 0

    def test_to_dict_keys(self):
        data = get_navigation_stats(StateGraph(make_grid(FLAT), TEST_PROFILE)).to_dict()
        assert data["totalStates"] == 10
        assert data["canonicalStart"] == {"x": 0, "y": 1, "gravity": "DOWN"}
        assert data["gridSize"] == {"width": 10, "height": 3}
