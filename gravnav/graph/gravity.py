"""
Gravity directions for navigation.

The agent's "down" can point along any of the four cardinal directions. Each
direction maps to a unit vector on the grid (y grows downward) and to the
gravity-relative "right" the agent walks along.
"""

from enum import Enum
from typing import Tuple, Union

from ..exceptions import InvalidState


class GravityDirection(Enum):
    """Closed set of gravity orientations."""

    DOWN = "DOWN"
    UP = "UP"
    LEFT = "LEFT"
    RIGHT = "RIGHT"

    @property
    def vector(self) -> Tuple[int, int]:
        """Unit step toward the floor."""
        return _GRAVITY_VECTORS[self]

    @property
    def right_vector(self) -> Tuple[int, int]:
        """Unit step the agent perceives as "right" while standing."""
        return _RIGHT_VECTORS[self]

    @property
    def is_vertical(self) -> bool:
        return self in (GravityDirection.DOWN, GravityDirection.UP)

    @property
    def opposite(self) -> "GravityDirection":
        dx, dy = self.vector
        return GravityDirection.from_vector(-dx, -dy)

    @classmethod
    def from_vector(cls, dx: int, dy: int) -> "GravityDirection":
        """Map a cardinal unit step back to its gravity direction."""
        for direction, vector in _GRAVITY_VECTORS.items():
            if vector == (dx, dy):
                return direction
        raise ValueError(f"({dx}, {dy}) is not a cardinal unit vector")

    @classmethod
    def parse(cls, value: Union[str, "GravityDirection"]) -> "GravityDirection":
        """
        Parse a gravity tag.

        Args:
            value: GravityDirection or case-insensitive tag ("down", "UP", ...)

        Returns:
            Matching GravityDirection

        Raises:
            InvalidState: If the tag names no gravity direction
        """
        if isinstance(value, GravityDirection):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise InvalidState(f"Unknown gravity direction: {value!r}")


# Search and enumeration order
GRAVITY_ORDER = (
    GravityDirection.DOWN,
    GravityDirection.UP,
    GravityDirection.LEFT,
    GravityDirection.RIGHT,
)

_GRAVITY_VECTORS = {
    GravityDirection.DOWN: (0, 1),
    GravityDirection.UP: (0, -1),
    GravityDirection.LEFT: (-1, 0),
    GravityDirection.RIGHT: (1, 0),
}

_RIGHT_VECTORS = {
    GravityDirection.DOWN: (1, 0),
    GravityDirection.UP: (-1, 0),
    GravityDirection.LEFT: (0, 1),  # Wall on the left, "right" is screen-down
    GravityDirection.RIGHT: (0, -1),  # Wall on the right, "right" is screen-up
}

# Name of the surface the agent stands on for each gravity
SURFACE_NAMES = {
    GravityDirection.DOWN: "floor",
    GravityDirection.UP: "ceiling",
    GravityDirection.LEFT: "left wall",
    GravityDirection.RIGHT: "right wall",
}
