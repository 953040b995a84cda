"""
Shared data types for navigation.

This module contains the value types passed between the movement generator,
the searches and diagnostics, kept here to avoid circular imports. All of them
are immutable and freshly built per query.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Optional, Tuple

from .gravity import GravityDirection

Point = Tuple[float, float]


@dataclass(frozen=True)
class State:
    """
    Agent configuration: cell plus gravity.

    Gravity is part of identity: standing on a ceiling at (x, y) is a
    different node than standing on the floor at the same cell.
    """

    x: int
    y: int
    gravity: GravityDirection

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def manhattan_to(self, x: int, y: int) -> int:
        return abs(self.x - x) + abs(self.y - y)

    def to_dict(self) -> Dict[str, object]:
        return {"x": self.x, "y": self.y, "gravity": self.gravity.value}

    def __str__(self) -> str:
        return f"({self.x}, {self.y}, {self.gravity.value})"


class MoveKind(Enum):
    """Movement primitives the agent can perform."""

    WALK = "walk"  # One cell along the surface
    FALL = "fall"  # Step off a ledge and drop along gravity
    JUMP = "jump"  # Simulated arc, may land on a new surface


@dataclass(frozen=True)
class JumpVariant:
    """One entry of the jump table: launch speed against gravity and sideways speed."""

    strength: float
    lateral: float


@dataclass(frozen=True)
class Move:
    """
    Single transition between two states.

    ``trajectory`` holds the continuous positions visited (one per simulation
    step for jumps, one per cell for falls, empty for walks). Only its final
    point may lie in a solid cell.
    """

    from_state: State
    to_state: State
    kind: MoveKind
    cost: int
    trajectory: Tuple[Point, ...] = ()
    variant: Optional[JumpVariant] = None

    def to_dict(self) -> Dict[str, object]:
        data = {
            "from": self.from_state.to_dict(),
            "to": self.to_state.to_dict(),
            "kind": self.kind.value,
            "cost": self.cost,
            "trajectory": [list(point) for point in self.trajectory],
        }
        if self.variant is not None:
            data["strength"] = self.variant.strength
            data["lateral"] = self.variant.lateral
        return data


@dataclass(frozen=True)
class Path:
    """
    Chain of moves from ``start``.

    An empty path means the agent is already at its goal; "no path" is
    represented by ``None`` wherever a Path is returned.
    """

    start: State
    moves: Tuple[Move, ...] = ()

    def __post_init__(self):
        current = self.start
        for move in self.moves:
            if move.from_state != current:
                raise ValueError(
                    f"Broken path: move starts at {move.from_state}, expected {current}"
                )
            current = move.to_state

    @property
    def end(self) -> State:
        return self.moves[-1].to_state if self.moves else self.start

    @property
    def total_cost(self) -> int:
        return sum(move.cost for move in self.moves)

    def extended(self, move: Move) -> "Path":
        return Path(self.start, self.moves + (move,))

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self.moves)

    def __getitem__(self, index):
        return self.moves[index]

    def to_dict(self) -> Dict[str, object]:
        return {
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
            "total_cost": self.total_cost,
            "moves": [move.to_dict() for move in self.moves],
        }


@dataclass(frozen=True)
class ReachableCell:
    """A reachable state with its minimum cost and the route achieving it."""

    state: State
    cost: int
    path: Path

    def to_dict(self) -> Dict[str, object]:
        return {
            **self.state.to_dict(),
            "cost": self.cost,
            "path": [move.to_dict() for move in self.path],
        }


@dataclass(frozen=True)
class ClosestReachable:
    """Result of a closest-reachable query; ``cell`` is None only if nothing is reachable."""

    cell: Optional[ReachableCell]
    distance: float


@dataclass(frozen=True)
class NavigationStats:
    """Aggregate statistics of a level's navigation graph."""

    total_states: int
    by_gravity: Dict[str, int]
    walkable_area: int
    canonical_start: Optional[State]
    reachable_from_start: int
    reachable_fraction: float
    sampled_starts: int
    mean_reachable_fraction: float
    component_count: int
    largest_component: int
    grid_size: Tuple[int, int] = field(default=(0, 0))

    def to_dict(self) -> Dict[str, object]:
        return {
            "totalStates": self.total_states,
            "byGravity": dict(self.by_gravity),
            "walkableArea": self.walkable_area,
            "canonicalStart": (
                self.canonical_start.to_dict() if self.canonical_start else None
            ),
            "reachableFromStart": self.reachable_from_start,
            "reachableFraction": self.reachable_fraction,
            "sampledStarts": self.sampled_starts,
            "meanReachableFraction": self.mean_reachable_fraction,
            "componentCount": self.component_count,
            "largestComponent": self.largest_component,
            "gridSize": {"width": self.grid_size[0], "height": self.grid_size[1]},
        }
