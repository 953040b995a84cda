"""
Gravity-aware pathfinding.

Point-to-point A* over the same state graph the reachability engine explores.
"""

from .astar_pathfinder import GravityAStar

__all__ = ['GravityAStar']
