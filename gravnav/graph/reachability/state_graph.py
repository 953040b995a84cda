"""
Implicit navigation graph over (x, y, gravity) states.

Nodes are standing states, edges are the moves PhysicsMovement generates.
Nothing is built up front: successors are computed on first request and
remembered for the lifetime of the graph, so repeated searches on the same
level share the cost of jump simulation.
"""

import logging
from typing import Dict, Iterable, List, Optional

import networkx as nx

from .physics_movement import PhysicsMovement
from ..gravity import GRAVITY_ORDER
from ..navigation_types import Move, State
from ..tile_grid import GridModel
from ...nav_config import DEFAULT_CONFIG, NavigationConfig

logger = logging.getLogger(__name__)


class StateGraph:
    """Lazily expanded state graph for one grid and jump profile."""

    def __init__(self, grid: GridModel, config: NavigationConfig = DEFAULT_CONFIG):
        self.grid = grid
        self.config = config
        self.movement = PhysicsMovement(grid, config)
        self._successors: Dict[State, List[Move]] = {}

    def is_valid_standing(self, state: State) -> bool:
        return self.movement.is_valid_standing(state)

    def successors(self, state: State) -> List[Move]:
        """Outgoing moves of ``state``, generated on first use."""
        moves = self._successors.get(state)
        if moves is None:
            moves = self.movement.get_moves(state)
            self._successors[state] = moves
        return moves

    def all_valid_states(self) -> List[State]:
        """Every standing state, row-major, gravity order DOWN, UP, LEFT, RIGHT."""
        states = []
        for x, y in self.grid.open_cells():
            for gravity in GRAVITY_ORDER:
                state = State(x, y, gravity)
                if self.movement.is_valid_standing(state):
                    states.append(state)
        return states

    @property
    def expanded_count(self) -> int:
        return len(self._successors)

    def to_networkx(self, states: Optional[Iterable[State]] = None) -> nx.DiGraph:
        """
        Materialise the graph as a networkx DiGraph.

        Parallel moves between the same pair of states collapse to the
        cheapest one, stored in the ``move`` edge attribute with its
        ``weight``.

        Args:
            states: Nodes to expand; defaults to every standing state

        Returns:
            DiGraph keyed by State
        """
        graph = nx.DiGraph()
        nodes = list(states) if states is not None else self.all_valid_states()
        graph.add_nodes_from(nodes)
        for state in nodes:
            for move in self.successors(state):
                existing = graph.get_edge_data(state, move.to_state)
                if existing is None or move.cost < existing["weight"]:
                    graph.add_edge(
                        state, move.to_state, weight=move.cost, move=move
                    )
        logger.debug(
            f"Materialised state graph: {graph.number_of_nodes()} nodes, "
            f"{graph.number_of_edges()} edges"
        )
        return graph
