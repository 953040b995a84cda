"""
Physics-based movement primitives for reachability analysis.

This module enumerates the legal moves out of a standing state:
- Walking one cell along the current surface
- Stepping off a ledge and falling along gravity
- Jumping along a simulated arc, possibly landing on a new surface with a new
  gravity

Arcs come from trajectory_simulator, collisions from CollisionChecker; this
module turns their results into validated Move objects.
"""

import logging
from typing import List, Optional, Tuple

from .collision_checker import CollisionChecker, SweepOutcome, cell_of
from .trajectory_simulator import simulate_arc
from ..gravity import GravityDirection
from ..navigation_types import JumpVariant, Move, MoveKind, Point, State
from ..tile_grid import GridModel
from ...constants.physics_constants import CELL_CENTER_OFFSET, WALK_COST
from ...exceptions import TrajectoryFault
from ...nav_config import DEFAULT_CONFIG, NavigationConfig

logger = logging.getLogger(__name__)


def cell_center(x: int, y: int) -> Point:
    return x + CELL_CENTER_OFFSET, y + CELL_CENTER_OFFSET


class PhysicsMovement:
    """Generates walk, fall and jump moves for one grid and jump profile."""

    def __init__(self, grid: GridModel, config: NavigationConfig = DEFAULT_CONFIG):
        """
        Initialize physics movement calculator.

        Args:
            grid: Grid to move on
            config: Jump profile
        """
        self.grid = grid
        self.config = config
        self.collision_checker = CollisionChecker(grid)
        self._variants = config.jump_variants()

    def is_valid_standing(self, state: State) -> bool:
        """Own cell open and the cell one step along gravity solid."""
        gx, gy = state.gravity.vector
        return self.grid.is_open(state.x, state.y) and self.grid.is_solid(
            state.x + gx, state.y + gy
        )

    def get_moves(self, state: State) -> List[Move]:
        """
        All legal moves out of a standing state.

        Order is deterministic: walks, then falls, then jumps in jump-table
        order. Non-standing states have no moves.
        """
        if not self.is_valid_standing(state):
            return []
        moves = self.get_walk_moves(state)
        moves.extend(self.get_fall_moves(state))
        moves.extend(self.get_jump_moves(state))
        return moves

    def get_walk_moves(self, state: State) -> List[Move]:
        """Step one cell left/right along the surface while the floor continues."""
        moves = []
        for dx, dy in self._lateral_steps(state.gravity):
            target = State(state.x + dx, state.y + dy, state.gravity)
            if self.is_valid_standing(target):
                moves.append(Move(state, target, MoveKind.WALK, WALK_COST))
        return moves

    def get_fall_moves(self, state: State) -> List[Move]:
        """Step off a ledge and drop along gravity until a floor is found."""
        moves = []
        gx, gy = state.gravity.vector
        for dx, dy in self._lateral_steps(state.gravity):
            edge_x, edge_y = state.x + dx, state.y + dy
            if not self.grid.is_open(edge_x, edge_y):
                continue
            if self.grid.is_solid(edge_x + gx, edge_y + gy):
                continue  # Floor continues, that is a walk

            landing = self._trace_fall(edge_x, edge_y, state.gravity)
            if landing is None:
                continue
            target, trajectory = landing
            move = Move(
                state,
                target,
                MoveKind.FALL,
                cost=len(trajectory) - 1,  # step-off cell plus cells fallen
                trajectory=trajectory,
            )
            self._check_no_tunneling(move)
            moves.append(move)
        return moves

    def get_jump_moves(self, state: State) -> List[Move]:
        """Simulate every jump variant from a standing state and keep the landings."""
        if not self.is_valid_standing(state):
            return []
        moves = []
        for variant in self._variants:
            move = self.simulate_jump(state, variant)
            if move is not None:
                moves.append(move)
        return moves

    def simulate_jump(self, state: State, variant: JumpVariant) -> Optional[Move]:
        """
        Simulate one jump and build its landing move.

        Args:
            state: Take-off state (assumed standing)
            variant: Launch strength and sideways speed

        Returns:
            JUMP move, or None if the arc leaves the grid, is blocked on its
            first step, never lands, or lands back on the take-off state
        """
        previous = cell_center(state.x, state.y)
        trajectory: List[Point] = []
        prefer_vertical = state.gravity.is_vertical

        for step, point in enumerate(
            simulate_arc(previous, state.gravity, variant, self.config), start=1
        ):
            result = self.collision_checker.sweep(previous, point, prefer_vertical)

            if result.outcome is SweepOutcome.EXIT:
                return None

            if result.outcome is SweepOutcome.HIT:
                if step == 1:
                    return None  # Blocked before leaving the surface
                trajectory.append(result.point)
                target = self._landing_state(result.last_open, result.normal)
                if target is None or target == state:
                    return None
                move = Move(
                    state,
                    target,
                    MoveKind.JUMP,
                    cost=max(step, state.manhattan_to(target.x, target.y)),
                    trajectory=tuple(trajectory),
                    variant=variant,
                )
                self._check_no_tunneling(move)
                return move

            trajectory.append(point)
            previous = point

        return None

    def _landing_state(
        self, cell: Tuple[int, int], normal: GravityDirection
    ) -> Optional[State]:
        """Gravity after landing points into the face that was struck."""
        target = State(cell[0], cell[1], normal)
        if not self.is_valid_standing(target):
            # The sweep only reports open cells next to the struck solid
            raise TrajectoryFault(f"Landing {target} is not a standing state")
        return target

    def _trace_fall(
        self, x: int, y: int, gravity: GravityDirection
    ) -> Optional[Tuple[State, Tuple[Point, ...]]]:
        """Drop from an open cell until the next cell is solid; None if the grid ends first."""
        gx, gy = gravity.vector
        points = [cell_center(x, y)]
        while True:
            nx, ny = x + gx, y + gy
            if not self.grid.in_bounds(nx, ny):
                return None
            if self.grid.is_solid(nx, ny):
                cx, cy = cell_center(x, y)
                contact = (
                    cx + gx * CELL_CENTER_OFFSET,
                    cy + gy * CELL_CENTER_OFFSET,
                )
                points.append(contact)
                return State(x, y, gravity), tuple(points)
            x, y = nx, ny
            points.append(cell_center(x, y))

    def _check_no_tunneling(self, move: Move) -> None:
        """Every trajectory point but the last must be in an open cell."""
        for point in move.trajectory[:-1]:
            if not self.grid.is_open(*cell_of(point)):
                raise TrajectoryFault(
                    f"{move.kind.value} from {move.from_state} passes through "
                    f"cell {cell_of(point)} at {point}"
                )

    @staticmethod
    def _lateral_steps(gravity: GravityDirection) -> Tuple[Tuple[int, int], ...]:
        """Gravity-relative left, then right."""
        rx, ry = gravity.right_vector
        return (-rx, -ry), (rx, ry)
