"""
Reachability analysis package for the gravity state graph.

The components work together to determine which (x, y, gravity) states an
agent can reach:
- trajectory_simulator: discrete jump arc integration
- collision_checker: sweeps arc segments through the grid
- physics_movement: walk / fall / jump move generation
- state_graph: lazily expanded graph of standing states
- reachability_analyzer: Dijkstra over the state graph
- reachability_cache: caller-owned LRU memo of results
"""

from .collision_checker import CollisionChecker, SweepOutcome, SweepResult
from .physics_movement import PhysicsMovement
from .state_graph import StateGraph
from .reachability_analyzer import ReachabilityAnalyzer
from .reachability_cache import ReachabilityCache
from .reachability_types import ReachabilityResult

__all__ = [
    "CollisionChecker",
    "SweepOutcome",
    "SweepResult",
    "PhysicsMovement",
    "StateGraph",
    "ReachabilityAnalyzer",
    "ReachabilityCache",
    "ReachabilityResult",
]
