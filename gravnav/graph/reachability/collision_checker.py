"""
Collision detection between simulated arcs and the tile grid.

Segments are swept cell by cell (supercover traversal), so a fast arc can
never skip over a solid cell between two samples. The sweep reports the first
solid cell entered, the face it was entered through, or the point where the
segment leaves the grid.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..gravity import GravityDirection
from ..navigation_types import Point
from ..tile_grid import GridModel

Cell = Tuple[int, int]


def cell_of(point: Point) -> Cell:
    """Cell containing a continuous point; cell (x, y) covers [x, x+1) x [y, y+1)."""
    return math.floor(point[0]), math.floor(point[1])


class SweepOutcome(Enum):
    CLEAR = "clear"  # Segment stays in open cells
    HIT = "hit"  # Segment enters a solid cell
    EXIT = "exit"  # Segment leaves the grid


@dataclass(frozen=True)
class SweepResult:
    """
    Outcome of sweeping one segment.

    For HIT, ``cell`` is the solid cell struck, ``last_open`` the open cell the
    segment was in just before, and ``normal`` the direction of travel into
    the struck face. ``point`` is where the segment crossed the boundary.
    """

    outcome: SweepOutcome
    cell: Optional[Cell] = None
    last_open: Optional[Cell] = None
    normal: Optional[GravityDirection] = None
    point: Optional[Point] = None


_CLEAR = SweepResult(SweepOutcome.CLEAR)


class CollisionChecker:
    """Sweeps segments through a GridModel."""

    def __init__(self, grid: GridModel):
        """
        Initialize collision checker.

        Args:
            grid: Grid to test segments against
        """
        self.grid = grid

    def sweep(
        self, start: Point, end: Point, preferred_vertical: bool = True
    ) -> SweepResult:
        """
        Walk every cell the segment start->end passes through.

        The number of boundaries crossed on each axis is taken from the cells
        of the two endpoints, so the traversal always ends in ``cell_of(end)``
        when nothing is struck.

        Args:
            start: Segment start; must lie in an open cell
            end: Segment end
            preferred_vertical: On an exact corner crossing where both
                neighbouring faces are candidates, prefer the horizontal face
                (vertical travel) if True, the vertical face otherwise

        Returns:
            SweepResult describing the first event along the segment
        """
        x0, y0 = start
        dx = end[0] - x0
        dy = end[1] - y0
        cx, cy = cell_of(start)
        end_x, end_y = cell_of(end)
        remaining_x = abs(end_x - cx)
        remaining_y = abs(end_y - cy)

        step_x, t_max_x, t_delta_x = _axis_setup(x0, cx, dx)
        step_y, t_max_y, t_delta_y = _axis_setup(y0, cy, dy)

        while remaining_x or remaining_y:
            if remaining_x and remaining_y and t_max_x == t_max_y:
                result = self._corner(
                    (cx, cy), step_x, step_y, _lerp(start, dx, dy, t_max_x),
                    preferred_vertical,
                )
                if result is not None:
                    return result
                cx += step_x
                cy += step_y
                t_max_x += t_delta_x
                t_max_y += t_delta_y
                remaining_x -= 1
                remaining_y -= 1
                continue

            if remaining_x and (not remaining_y or t_max_x < t_max_y):
                t = t_max_x
                nxt = (cx + step_x, cy)
                normal = GravityDirection.from_vector(step_x, 0)
                t_max_x += t_delta_x
                remaining_x -= 1
            else:
                t = t_max_y
                nxt = (cx, cy + step_y)
                normal = GravityDirection.from_vector(0, step_y)
                t_max_y += t_delta_y
                remaining_y -= 1

            point = _lerp(start, dx, dy, t)
            if not self.grid.in_bounds(*nxt):
                return SweepResult(SweepOutcome.EXIT, point=point)
            if self.grid.is_solid(*nxt):
                return SweepResult(
                    SweepOutcome.HIT,
                    cell=nxt,
                    last_open=(cx, cy),
                    normal=normal,
                    point=point,
                )
            cx, cy = nxt

        return _CLEAR

    def _corner(
        self,
        current: Cell,
        step_x: int,
        step_y: int,
        point: Point,
        preferred_vertical: bool,
    ) -> Optional[SweepResult]:
        """
        Resolve a crossing exactly through a cell corner.

        Returns None when the segment passes the corner into the diagonal cell
        without touching anything.
        """
        cx, cy = current
        side_x = (cx + step_x, cy)  # entered through a vertical face
        side_y = (cx, cy + step_y)  # entered through a horizontal face
        diagonal = (cx + step_x, cy + step_y)
        normal_x = GravityDirection.from_vector(step_x, 0)
        normal_y = GravityDirection.from_vector(0, step_y)

        hits = []
        if self.grid.is_solid(*side_y):
            hits.append((side_y, current, normal_y, True))
        if self.grid.is_solid(*side_x):
            hits.append((side_x, current, normal_x, False))
        if not hits and self.grid.is_solid(*diagonal):
            # Brushing the corner of a solid: land beside it on either face
            if self.grid.is_open(*side_x):
                hits.append((diagonal, side_x, normal_y, True))
            if self.grid.is_open(*side_y):
                hits.append((diagonal, side_y, normal_x, False))

        if hits:
            hits.sort(key=lambda hit: hit[3] != preferred_vertical)
            cell, last_open, normal, _ = hits[0]
            return SweepResult(
                SweepOutcome.HIT,
                cell=cell,
                last_open=last_open,
                normal=normal,
                point=point,
            )

        if not (
            self.grid.in_bounds(*side_x)
            and self.grid.in_bounds(*side_y)
            and self.grid.in_bounds(*diagonal)
        ):
            return SweepResult(SweepOutcome.EXIT, point=point)
        return None


def _axis_setup(origin: float, cell: int, delta: float) -> Tuple[int, float, float]:
    """Step sign, parameter of the first boundary crossing and per-cell increment."""
    if delta > 0:
        return 1, (cell + 1 - origin) / delta, 1.0 / delta
    if delta < 0:
        return -1, (cell - origin) / delta, -1.0 / delta
    return 0, math.inf, math.inf


def _lerp(start: Point, dx: float, dy: float, t: float) -> Point:
    return start[0] + dx * t, start[1] + dy * t
