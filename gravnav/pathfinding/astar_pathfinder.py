"""
Goal-directed pathfinding over the gravity state graph.

A* with the Manhattan distance between cells as heuristic. Gravity is ignored
by the heuristic; it stays admissible and consistent because every move costs
at least the number of cells it displaces the agent (walks 1 per cell, falls
1 per cell passed, jumps max(steps, displacement)).
"""

import heapq
import itertools
import logging
from typing import Dict, List, Optional, Tuple

from ..exceptions import InvalidState
from ..graph.gravity import GravityDirection
from ..graph.navigation_types import Move, Path, State
from ..graph.reachability.reachability_analyzer import validate_start
from ..graph.reachability.state_graph import StateGraph
from ..graph.tile_grid import GridModel
from ..nav_config import DEFAULT_CONFIG, NavigationConfig

logger = logging.getLogger(__name__)


class GravityAStar:
    """A* pathfinder for (x, y, gravity) states."""

    def __init__(
        self,
        grid: GridModel,
        config: NavigationConfig = DEFAULT_CONFIG,
        state_graph: Optional[StateGraph] = None,
    ):
        """
        Args:
            grid: Grid to search
            config: Jump profile
            state_graph: Optional graph shared with other searches on this grid
        """
        self.grid = grid
        self.config = config
        self.graph = state_graph or StateGraph(grid, config)

    def find_path(
        self,
        start: State,
        goal_x: int,
        goal_y: int,
        goal_gravity: Optional[GravityDirection] = None,
    ) -> Optional[Path]:
        """
        Find the cheapest path from ``start`` to the goal cell.

        Args:
            start: Standing state to search from
            goal_x: Goal cell x
            goal_y: Goal cell y
            goal_gravity: Required gravity at the goal; any gravity if None

        Returns:
            Path (empty if start already satisfies the goal), or None if the
            goal cannot be reached

        Raises:
            InvalidState: If start or goal is off the grid, or start is not
                standing
        """
        validate_start(self.graph, start)
        if not self.grid.in_bounds(goal_x, goal_y):
            raise InvalidState(
                f"Goal ({goal_x}, {goal_y}) is outside the "
                f"{self.grid.width}x{self.grid.height} grid"
            )

        def is_goal(state: State) -> bool:
            if state.x != goal_x or state.y != goal_y:
                return False
            return goal_gravity is None or state.gravity == goal_gravity

        counter = itertools.count()
        frontier: List[Tuple[int, int, int, State]] = [
            (start.manhattan_to(goal_x, goal_y), next(counter), 0, start)
        ]
        best_cost: Dict[State, int] = {start: 0}
        came_from: Dict[State, Move] = {}
        closed = set()

        while frontier:
            _, _, cost, state = heapq.heappop(frontier)
            if state in closed:
                continue
            closed.add(state)

            if is_goal(state):
                logger.debug(
                    f"A* reached {state} at cost {cost} after {len(closed)} expansions"
                )
                return self._reconstruct_path(start, state, came_from)

            for move in self.graph.successors(state):
                target = move.to_state
                if target in closed:
                    continue
                new_cost = cost + move.cost
                if new_cost < best_cost.get(target, float("inf")):
                    best_cost[target] = new_cost
                    came_from[target] = move
                    priority = new_cost + target.manhattan_to(goal_x, goal_y)
                    heapq.heappush(
                        frontier, (priority, next(counter), new_cost, target)
                    )

        logger.debug(
            f"A* found no path from {start} to ({goal_x}, {goal_y}) "
            f"after {len(closed)} expansions"
        )
        return None

    @staticmethod
    def _reconstruct_path(
        start: State, goal: State, came_from: Dict[State, Move]
    ) -> Path:
        moves = []
        state = goal
        while state != start:
            move = came_from[state]
            moves.append(move)
            state = move.from_state
        moves.reverse()
        return Path(start, tuple(moves))
