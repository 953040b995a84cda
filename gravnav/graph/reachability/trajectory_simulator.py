"""
Discrete-time jump arc integration.

The simulator knows nothing about the grid: it produces the candidate arc for
a jump variant and leaves collision handling to CollisionChecker. Keeping the
two apart lets each be tested on its own.
"""

from typing import Iterator, Tuple

from ..gravity import GravityDirection
from ..navigation_types import JumpVariant, Point
from ...nav_config import NavigationConfig


def launch_velocity(
    gravity: GravityDirection, variant: JumpVariant
) -> Tuple[float, float]:
    """Screen-space velocity at take-off, before the first gravity update."""
    gx, gy = gravity.vector
    rx, ry = gravity.right_vector
    return (
        -variant.strength * gx + variant.lateral * rx,
        -variant.strength * gy + variant.lateral * ry,
    )


def simulate_arc(
    origin: Point,
    gravity: GravityDirection,
    variant: JumpVariant,
    config: NavigationConfig,
) -> Iterator[Point]:
    """
    Yield the agent position after each simulation step.

    Per step, the speed along gravity is accelerated and clamped to terminal
    velocity (semi-implicit Euler), then the position advances. The sideways
    speed is constant. The generator stops after ``config.max_jump_steps``.

    Args:
        origin: Take-off position (cell centre)
        gravity: Gravity at take-off; fixed for the whole arc
        variant: Launch strength and sideways speed
        config: Integration constants

    Yields:
        Position (x, y) after steps 1, 2, ...
    """
    gx, gy = gravity.vector
    rx, ry = gravity.right_vector
    x, y = origin
    fall_speed = -variant.strength

    for _ in range(config.max_jump_steps):
        fall_speed = min(fall_speed + config.gravity_accel, config.max_fall_speed)
        x += fall_speed * gx + variant.lateral * rx
        y += fall_speed * gy + variant.lateral * ry
        yield x, y
