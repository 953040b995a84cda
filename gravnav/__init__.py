# This file makes this a Python package

# Functional navigation interface
from .navigation import (
    find_path,
    describe_path,
    get_navigation_stats,
    get_all_valid_states,
    calculate_reachable_cells,
    find_closest_reachable,
    get_jump_trajectories,
    build_grid,
)
from .exceptions import (
    NavigationError,
    InvalidGrid,
    InvalidState,
    TrajectoryFault,
)
from .graph import (
    GravityDirection,
    TileGrid,
    GridModel,
    State,
    Move,
    MoveKind,
    JumpVariant,
    Path,
    ReachableCell,
    ClosestReachable,
    NavigationStats,
)
from .graph.reachability import ReachabilityCache
from .nav_config import NavigationConfig

__all__ = [
    # Navigation interface
    "find_path",
    "describe_path",
    "get_navigation_stats",
    "get_all_valid_states",
    "calculate_reachable_cells",
    "find_closest_reachable",
    "get_jump_trajectories",
    "build_grid",
    # Errors
    "NavigationError",
    "InvalidGrid",
    "InvalidState",
    "TrajectoryFault",
    # Data model
    "GravityDirection",
    "TileGrid",
    "GridModel",
    "State",
    "Move",
    "MoveKind",
    "JumpVariant",
    "Path",
    "ReachableCell",
    "ClosestReachable",
    "NavigationStats",
    # Configuration and caching
    "NavigationConfig",
    "ReachabilityCache",
]
