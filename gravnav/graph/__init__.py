"""
Grid model and navigation data types.

The reachability subpackage builds the gravity state graph on top of these.
"""

from .gravity import GravityDirection, GRAVITY_ORDER
from .tile_grid import TileGrid, GridModel
from .navigation_types import (
    State,
    Move,
    MoveKind,
    JumpVariant,
    Path,
    ReachableCell,
    ClosestReachable,
    NavigationStats,
)

__all__ = [
    "GravityDirection",
    "GRAVITY_ORDER",
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
]
