"""Terrain grid - the authoritative per-cell terrain store."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Iterable, Iterator, NamedTuple

import numpy as np


class Cell(NamedTuple):
    """An integer grid coordinate."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Cell:
        return Cell(self.x + dx, self.y + dy)

    def distance_sq(self, other: Cell) -> int:
        """Squared Euclidean distance to another cell."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy


class TerrainKind(IntEnum):
    """Terrain classification of a cell."""

    EMPTY = 0  # outside the generated bounds, or never written
    GRASS = 1
    WATER = 2
    MOUNTAIN = 3

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> TerrainKind:
        for kind, char in _SYMBOLS.items():
            if char == symbol:
                return kind
        raise ValueError(f"unknown terrain symbol {symbol!r}")


_SYMBOLS = {
    TerrainKind.EMPTY: " ",
    TerrainKind.GRASS: ".",
    TerrainKind.WATER: "~",
    TerrainKind.MOUNTAIN: "^",
}

CONCRETE_KINDS = (TerrainKind.GRASS, TerrainKind.WATER, TerrainKind.MOUNTAIN)


class TerrainGrid:
    """
    Dense terrain store for cells in [0, width) x [0, height).

    Kinds are held in a numpy array indexed ``[y, x]``. Lookups outside the
    bounds resolve to ``TerrainKind.EMPTY``; writes outside the bounds are
    rejected.
    """

    def __init__(self, width: int, height: int, cell_size: float = 1.0):
        """
        Initialize an all-EMPTY grid.

        Args:
            width: Number of columns
            height: Number of rows
            cell_size: World units per cell (for cell/world conversion)
        """
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.kinds = np.zeros((height, width), dtype=np.uint8)

    @classmethod
    def from_rows(cls, rows: Iterable[str], cell_size: float = 1.0) -> TerrainGrid:
        """
        Build a grid from text rows using the terrain symbols.

        ``.`` grass, ``~`` water, ``^`` mountain. Row 0 is y=0.
        """
        rows = list(rows)
        if not rows or any(len(row) != len(rows[0]) for row in rows):
            raise ValueError("rows must be non-empty and of equal length")
        grid = cls(len(rows[0]), len(rows), cell_size)
        for y, row in enumerate(rows):
            for x, symbol in enumerate(row):
                grid.kinds[y, x] = TerrainKind.from_symbol(symbol)
        return grid

    def in_bounds(self, cell: Cell) -> bool:
        return 0 <= cell.x < self.width and 0 <= cell.y < self.height

    def get(self, cell: Cell) -> TerrainKind:
        """Get the terrain kind at a cell (EMPTY when out of bounds)."""
        x, y = cell
        if 0 <= x < self.width and 0 <= y < self.height:
            return TerrainKind(int(self.kinds[y, x]))
        return TerrainKind.EMPTY

    def set(self, cell: Cell, kind: TerrainKind) -> None:
        """Set the terrain kind of an in-bounds cell."""
        if not self.in_bounds(cell):
            raise IndexError(f"cell {cell} is outside the {self.width}x{self.height} grid")
        self.kinds[cell.y, cell.x] = kind

    __getitem__ = get
    __setitem__ = set

    def cells(self) -> Iterator[Cell]:
        """Iterate all in-bounds cells, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield Cell(x, y)

    def cells_of(self, kind: TerrainKind) -> list[Cell]:
        """All in-bounds cells of the given kind, in row-major order."""
        ys, xs = np.nonzero(self.kinds == kind)
        return [Cell(int(x), int(y)) for y, x in zip(ys, xs)]

    def count(self, kind: TerrainKind) -> int:
        return int(np.count_nonzero(self.kinds == kind))

    def is_complete(self) -> bool:
        """True when every in-bounds cell holds a concrete kind."""
        return not np.any(self.kinds == TerrainKind.EMPTY)

    def is_border(self, cell: Cell) -> bool:
        """Check if a cell lies on the outer ring."""
        x, y = cell
        return x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1

    def copy(self) -> TerrainGrid:
        grid = TerrainGrid(self.width, self.height, self.cell_size)
        grid.kinds = self.kinds.copy()
        return grid

    def cell_center(self, cell: Cell) -> tuple[float, float]:
        """World position of the center of a cell."""
        return ((cell.x + 0.5) * self.cell_size, (cell.y + 0.5) * self.cell_size)

    def world_to_cell(self, x: float, y: float) -> Cell:
        """Cell containing a world position."""
        return Cell(math.floor(x / self.cell_size), math.floor(y / self.cell_size))

    def to_rows(self) -> list[str]:
        """Text rendering of the grid, one string per row."""
        return [
            "".join(TerrainKind(int(v)).symbol for v in self.kinds[y])
            for y in range(self.height)
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TerrainGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.kinds, other.kinds)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TerrainGrid({self.width}x{self.height})"
