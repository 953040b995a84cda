"""
Tile grid model for navigation.

This module provides the read-only view of a level that the navigation engine
works on: a rectangular grid of tile-kind tags plus the set of kinds treated as
solid. Solidity is resolved once into a numpy boolean mask so every collision
query is a single array lookup.
"""

import hashlib
from typing import Iterable, Iterator, Sequence, Tuple, Union

import numpy as np

from ..exceptions import InvalidGrid


class TileGrid:
    """
    Immutable rectangular grid of tile-kind tags.

    Rows are indexed by y (top to bottom), columns by x (left to right).
    """

    def __init__(self, rows: Iterable[Sequence[str]]):
        """
        Validate and freeze the grid.

        Args:
            rows: Row-major tile-kind tags

        Raises:
            InvalidGrid: If there are no rows, no columns, ragged rows, or
                non-string tags
        """
        frozen = tuple(tuple(row) for row in rows)
        if not frozen:
            raise InvalidGrid("Grid has no rows")

        width = len(frozen[0])
        if width == 0:
            raise InvalidGrid("Grid has no columns")

        for y, row in enumerate(frozen):
            if len(row) != width:
                raise InvalidGrid(
                    f"Row {y} has {len(row)} cells, expected {width}"
                )
            for x, kind in enumerate(row):
                if not isinstance(kind, str):
                    raise InvalidGrid(
                        f"Tile kind at ({x}, {y}) is {type(kind).__name__}, expected str"
                    )

        self._rows = frozen
        self.width = width
        self.height = len(frozen)
        self._fingerprint = None

    @property
    def rows(self) -> Tuple[Tuple[str, ...], ...]:
        return self._rows

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def kind_at(self, x: int, y: int) -> str:
        """Tile kind at (x, y). Out-of-range coordinates raise IndexError."""
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside {self.width}x{self.height} grid")
        return self._rows[y][x]

    @property
    def fingerprint(self) -> str:
        """Stable content hash, used as a cache key."""
        if self._fingerprint is None:
            digest = hashlib.md5(f"{self.width}x{self.height}".encode())
            for row in self._rows:
                digest.update(b"\n")
                digest.update("\x1f".join(row).encode())
            self._fingerprint = digest.hexdigest()
        return self._fingerprint

    def __eq__(self, other) -> bool:
        if not isinstance(other, TileGrid):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def __repr__(self) -> str:
        return f"TileGrid({self.width}x{self.height})"


class GridModel:
    """
    Tile grid combined with a solidity classification.

    This is the only view of the level the movement generator and the
    searches use. A cell is open iff it is in bounds and its kind is not solid;
    out-of-bounds cells are neither solid nor open.
    """

    def __init__(
        self,
        tiles: Union[TileGrid, Iterable[Sequence[str]]],
        solid_kinds: Iterable[str],
    ):
        """
        Args:
            tiles: TileGrid or raw row-major tags
            solid_kinds: Tile kinds that block movement and can be stood on; a
                single string is one kind, not a set of characters
        """
        self.tiles = tiles if isinstance(tiles, TileGrid) else TileGrid(tiles)
        if isinstance(solid_kinds, str):
            solid_kinds = (solid_kinds,)
        self.solid_kinds = frozenset(solid_kinds)

        mask = np.array(
            [[kind in self.solid_kinds for kind in row] for row in self.tiles.rows],
            dtype=bool,
        )
        mask.flags.writeable = False
        self.solid_mask = mask  # indexed [y, x]

    @property
    def width(self) -> int:
        return self.tiles.width

    @property
    def height(self) -> int:
        return self.tiles.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.tiles.width and 0 <= y < self.tiles.height

    def is_solid(self, x: int, y: int) -> bool:
        """True if (x, y) is in bounds and holds a solid kind."""
        if not self.in_bounds(x, y):
            return False
        return bool(self.solid_mask[y, x])

    def is_open(self, x: int, y: int) -> bool:
        """True if (x, y) is in bounds and not solid."""
        if not self.in_bounds(x, y):
            return False
        return not self.solid_mask[y, x]

    def open_cells(self) -> Iterator[Tuple[int, int]]:
        """Open cells in row-major order."""
        ys, xs = np.nonzero(~self.solid_mask)
        for y, x in zip(ys.tolist(), xs.tolist()):
            yield x, y

    @property
    def solid_fingerprint(self) -> str:
        return hashlib.md5("\x1f".join(sorted(self.solid_kinds)).encode()).hexdigest()

    @property
    def fingerprint(self) -> Tuple[str, str]:
        """(grid content hash, solid-set hash)."""
        return self.tiles.fingerprint, self.solid_fingerprint

    def __repr__(self) -> str:
        return (
            f"GridModel({self.width}x{self.height}, "
            f"solid={sorted(self.solid_kinds)})"
        )
