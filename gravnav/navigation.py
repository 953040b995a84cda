"""
Functional interface to the navigation engine.

These are the entry points a host (UI, route handler, CLI) calls. Each call
builds its own grid model and search state; pass a GridModel instead of raw
rows to skip re-validation, and a ReachabilityCache to memoise reachability
results across calls.
"""

import logging
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .analysis.navigation_diagnostics import describe_path, get_navigation_stats as _stats
from .exceptions import InvalidState
from .graph.gravity import GravityDirection
from .graph.navigation_types import (
    ClosestReachable,
    Move,
    NavigationStats,
    Path,
    ReachableCell,
    State,
)
from .graph.reachability.reachability_analyzer import ReachabilityAnalyzer, validate_start
from .graph.reachability.reachability_cache import ReachabilityCache
from .graph.reachability.state_graph import StateGraph
from .graph.tile_grid import GridModel
from .nav_config import DEFAULT_CONFIG, NavigationConfig
from .pathfinding.astar_pathfinder import GravityAStar

logger = logging.getLogger(__name__)

GridInput = Union[GridModel, Sequence[Sequence[str]]]
StateInput = Union[State, Mapping[str, object]]

__all__ = [
    "find_path",
    "describe_path",
    "get_navigation_stats",
    "get_all_valid_states",
    "calculate_reachable_cells",
    "find_closest_reachable",
    "get_jump_trajectories",
    "build_grid",
]


def build_grid(grid: GridInput, solid_tile_kinds: Iterable[str]) -> GridModel:
    """Wrap raw rows in a GridModel; a GridModel is returned as is."""
    if isinstance(grid, GridModel):
        return grid
    return GridModel(grid, solid_tile_kinds)


def _coerce_coordinates(data: Mapping[str, object], role: str) -> Tuple[int, int]:
    try:
        return int(data["x"]), int(data["y"])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidState(f"{role} needs integer 'x' and 'y': {data!r}") from e


def _coerce_state(value: StateInput, role: str) -> State:
    if isinstance(value, State):
        return value
    x, y = _coerce_coordinates(value, role)
    return State(x, y, GravityDirection.parse(value.get("gravity", "DOWN")))


def _coerce_goal(value: StateInput) -> Tuple[int, int, Optional[GravityDirection]]:
    if isinstance(value, State):
        return value.x, value.y, value.gravity
    x, y = _coerce_coordinates(value, "Goal")
    gravity = value.get("gravity")
    return x, y, GravityDirection.parse(gravity) if gravity else None


def find_path(
    grid: GridInput,
    solid_tile_kinds: Iterable[str],
    start: StateInput,
    goal: StateInput,
    config: NavigationConfig = DEFAULT_CONFIG,
) -> Optional[Path]:
    """
    Cheapest path between two states.

    Args:
        grid: Rows of tile-kind tags, or a GridModel
        solid_tile_kinds: Tags treated as solid
        start: State or mapping with x, y, gravity
        goal: State or mapping with x, y and optional gravity
        config: Jump profile

    Returns:
        Path (empty if start is the goal) or None if unreachable

    Raises:
        InvalidGrid: If the grid is malformed
        InvalidState: If start/goal are off the grid or start is not standing
    """
    model = build_grid(grid, solid_tile_kinds)
    start_state = _coerce_state(start, "Start")
    goal_x, goal_y, goal_gravity = _coerce_goal(goal)
    try:
        return GravityAStar(model, config).find_path(
            start_state, goal_x, goal_y, goal_gravity
        )
    except InvalidState as e:
        logger.warning(f"Rejected path query: {e}")
        raise


def get_navigation_stats(
    grid: GridInput,
    solid_tile_kinds: Iterable[str],
    config: NavigationConfig = DEFAULT_CONFIG,
    sample_size: Optional[int] = None,
) -> NavigationStats:
    """Level-wide statistics; see analysis.navigation_diagnostics."""
    model = build_grid(grid, solid_tile_kinds)
    return _stats(StateGraph(model, config), sample_size=sample_size)


def get_all_valid_states(
    grid: GridInput, solid_tile_kinds: Iterable[str]
) -> List[State]:
    """Every standing state, row-major, gravity order DOWN, UP, LEFT, RIGHT."""
    model = build_grid(grid, solid_tile_kinds)
    return StateGraph(model).all_valid_states()


def calculate_reachable_cells(
    x: int,
    y: int,
    gravity: Union[str, GravityDirection],
    grid: GridInput,
    solid_tile_kinds: Iterable[str],
    config: NavigationConfig = DEFAULT_CONFIG,
    cache: Optional[ReachabilityCache] = None,
) -> List[ReachableCell]:
    """
    Full reachable set from (x, y, gravity), cheapest first.

    The start itself is included with cost 0 and an empty path.
    """
    model = build_grid(grid, solid_tile_kinds)
    start = State(x, y, GravityDirection.parse(gravity))
    analyzer = ReachabilityAnalyzer(model, config, cache=cache)
    return analyzer.analyze(start).as_list()


def find_closest_reachable(
    x: int,
    y: int,
    gravity: Union[str, GravityDirection],
    target_x: int,
    target_y: int,
    grid: GridInput,
    solid_tile_kinds: Iterable[str],
    config: NavigationConfig = DEFAULT_CONFIG,
    cache: Optional[ReachabilityCache] = None,
) -> ClosestReachable:
    """
    Reachable state nearest (Manhattan) to a target cell.

    Ties go to the cheaper state, then to the one finalised first. The
    distance is 0 when the target itself is reachable.
    """
    cells = calculate_reachable_cells(
        x, y, gravity, grid, solid_tile_kinds, config=config, cache=cache
    )
    closest = None
    best_key = None
    for cell in cells:
        key = (cell.state.manhattan_to(target_x, target_y), cell.cost)
        if best_key is None or key < best_key:
            best_key = key
            closest = cell
    if closest is None:
        return ClosestReachable(cell=None, distance=float("inf"))
    return ClosestReachable(cell=closest, distance=best_key[0])


def get_jump_trajectories(
    x: int,
    y: int,
    gravity: Union[str, GravityDirection],
    grid: GridInput,
    solid_tile_kinds: Iterable[str],
    config: NavigationConfig = DEFAULT_CONFIG,
) -> List[Move]:
    """Valid jump moves from a standing state, in jump-table order, for visualization."""
    model = build_grid(grid, solid_tile_kinds)
    graph = StateGraph(model, config)
    start = State(x, y, GravityDirection.parse(gravity))
    validate_start(graph, start)
    return graph.movement.get_jump_moves(start)
