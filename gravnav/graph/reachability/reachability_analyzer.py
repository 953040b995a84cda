"""
Reachability analysis over the gravity state graph.

Moves have non-uniform costs (falls cost the cells passed, jumps the steps
simulated), so exploration is Dijkstra rather than BFS: the cheapest frontier
entry is finalised first and never re-expanded. Entries with equal cost are
popped in insertion order, which keeps results deterministic.
"""

import heapq
import itertools
import logging
from typing import Dict, List, Optional, Tuple

from .reachability_cache import ReachabilityCache
from .reachability_types import ReachabilityResult
from .state_graph import StateGraph
from ..navigation_types import Move, Path, ReachableCell, State
from ..tile_grid import GridModel
from ...exceptions import InvalidState
from ...nav_config import DEFAULT_CONFIG, NavigationConfig

logger = logging.getLogger(__name__)


def validate_start(graph: StateGraph, start: State) -> None:
    """
    Reject a start that is off the grid or not a standing state.

    Raises:
        InvalidState: If the start cannot be searched from
    """
    if not graph.grid.in_bounds(start.x, start.y):
        raise InvalidState(
            f"Start {start} is outside the {graph.grid.width}x{graph.grid.height} grid"
        )
    if not graph.is_valid_standing(start):
        raise InvalidState(f"Start {start} is not a valid standing state")


class ReachabilityAnalyzer:
    """
    Computes the full reachable set with minimum-cost paths.

    One analyzer wraps one StateGraph, so successive queries on the same
    level reuse generated moves. An optional ReachabilityCache memoises whole
    results per start state.
    """

    def __init__(
        self,
        grid: GridModel,
        config: NavigationConfig = DEFAULT_CONFIG,
        cache: Optional[ReachabilityCache] = None,
        state_graph: Optional[StateGraph] = None,
    ):
        """
        Initialize reachability analyzer.

        Args:
            grid: Grid to analyze
            config: Jump profile
            cache: Optional result cache owned by the caller
            state_graph: Optional pre-built graph to share with other searches
        """
        self.grid = grid
        self.config = config
        self.cache = cache
        self.graph = state_graph or StateGraph(grid, config)

    def analyze(self, start: State) -> ReachabilityResult:
        """
        Explore everything reachable from ``start``.

        Args:
            start: Standing state to explore from

        Returns:
            ReachabilityResult; unreachable states are simply absent

        Raises:
            InvalidState: If ``start`` is not a valid standing state
        """
        validate_start(self.graph, start)

        if self.cache is not None:
            cached = self.cache.get(self.grid, self.config, start)
            if cached is not None:
                return cached

        result = self._dijkstra(start)

        if self.cache is not None:
            self.cache.put(self.grid, self.config, start, result)
        return result

    def _dijkstra(self, start: State) -> ReachabilityResult:
        counter = itertools.count()
        frontier: List[Tuple[int, int, State]] = [(0, next(counter), start)]
        best_cost: Dict[State, int] = {start: 0}
        parent_move: Dict[State, Optional[Move]] = {start: None}
        finalised: Dict[State, ReachableCell] = {}
        pushes = 1

        while frontier:
            cost, _, state = heapq.heappop(frontier)
            if state in finalised:
                continue  # Stale entry, already finalised cheaper

            move = parent_move[state]
            if move is None:
                path = Path(start)
            else:
                path = finalised[move.from_state].path.extended(move)
            finalised[state] = ReachableCell(state=state, cost=cost, path=path)

            for move in self.graph.successors(state):
                target = move.to_state
                if target in finalised:
                    continue
                new_cost = cost + move.cost
                if new_cost < best_cost.get(target, float("inf")):
                    best_cost[target] = new_cost
                    parent_move[target] = move
                    heapq.heappush(frontier, (new_cost, next(counter), target))
                    pushes += 1

        logger.debug(
            f"Reachability from {start}: {len(finalised)} states finalised, "
            f"{pushes} frontier pushes"
        )
        return ReachabilityResult(start=start, cells=finalised)
