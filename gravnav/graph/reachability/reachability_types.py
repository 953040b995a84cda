"""
Shared data types for reachability analysis.

This module contains result structures used by both the reachability engine
and its cache to avoid circular imports.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional, Tuple

from ..navigation_types import ReachableCell, State


@dataclass(frozen=True)
class ReachabilityResult:
    """
    Full reachable set from one start state.

    ``cells`` is a read-only mapping ordered by finalisation, i.e. by
    non-decreasing cost. Results are immutable so a cached result can be
    handed to any number of callers.
    """

    start: State
    cells: Mapping[State, ReachableCell] = field(default_factory=dict)
    _positions: FrozenSet[Tuple[int, int]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))
        object.__setattr__(
            self, "_positions", frozenset(state.position for state in self.cells)
        )

    def is_state_reachable(self, state: State) -> bool:
        return state in self.cells

    def is_position_reachable(self, position: Tuple[int, int]) -> bool:
        """Check if a cell is reachable with any gravity."""
        return position in self._positions

    def cost_to(self, state: State) -> Optional[int]:
        cell = self.cells.get(state)
        return cell.cost if cell is not None else None

    @property
    def reachable_positions(self) -> FrozenSet[Tuple[int, int]]:
        return self._positions

    def as_list(self) -> List[ReachableCell]:
        return list(self.cells.values())

    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, state: State) -> bool:
        return state in self.cells
