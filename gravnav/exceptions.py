"""
Error taxonomy for the navigation engine.

"No path" is not an error: path queries return ``None`` for it.
"""


class NavigationError(Exception):
    """Base class for all navigation engine errors."""


class InvalidGrid(NavigationError, ValueError):
    """Grid is ragged, empty, or holds non-string tile kinds."""


class InvalidState(NavigationError, ValueError):
    """Query rejected: coordinates out of bounds, start not standing, or bad gravity tag."""


class TrajectoryFault(NavigationError, RuntimeError):
    """Internal invariant violated while building a move (e.g. a trajectory through a solid)."""
