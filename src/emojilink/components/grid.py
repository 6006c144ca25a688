from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

from emojilink.errors import OutOfBounds


class Coord(NamedTuple):
    """Immutable (row, col) cell address; compares equal to a plain tuple."""
    row: int
    col: int


@dataclass(slots=True)
class Grid:
    """Square board of symbol-or-empty cells.

    Lives on the board entity. ``None`` marks a cleared cell. The size is fixed
    once built and the only mutation is :meth:`clear`.
    """
    size: int
    cells: List[List[Optional[str]]]

    @classmethod
    def create(cls, size: int, palette: Sequence[str], rng: random.Random | None = None) -> "Grid":
        """Fill every cell independently and uniformly from ``palette``."""
        if size < 1:
            raise ValueError(f"grid size must be positive, got {size}")
        if not palette:
            raise ValueError("palette must contain at least one symbol")
        rng = rng or random.Random()
        choices = list(palette)
        cells = [[rng.choice(choices) for _ in range(size)] for _ in range(size)]
        return cls(size=size, cells=cells)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[str]]]) -> "Grid":
        """Build a grid from explicit rows (``None`` or ``'.'`` = empty)."""
        size = len(rows)
        if size < 1:
            raise ValueError("grid needs at least one row")
        cells: List[List[Optional[str]]] = []
        for row in rows:
            if len(row) != size:
                raise ValueError(f"grid must be square; row of length {len(row)} in a {size}-row grid")
            cells.append([None if value in (None, '.') else value for value in row])
        return cls(size=size, cells=cells)

    def in_bounds(self, coord: Tuple[int, int]) -> bool:
        row, col = coord
        return 0 <= row < self.size and 0 <= col < self.size

    def _require(self, coord: Tuple[int, int]) -> Coord:
        if not self.in_bounds(coord):
            raise OutOfBounds(coord, self.size)
        return Coord(*coord)

    def get(self, coord: Tuple[int, int]) -> Optional[str]:
        row, col = self._require(coord)
        return self.cells[row][col]

    def is_empty(self, coord: Tuple[int, int]) -> bool:
        return self.get(coord) is None

    def clear(self, coord: Tuple[int, int]) -> None:
        row, col = self._require(coord)
        self.cells[row][col] = None

    def occupied(self) -> Iterator[Tuple[Coord, str]]:
        """Yield (coord, symbol) for occupied cells in row-major order."""
        for row in range(self.size):
            for col in range(self.size):
                symbol = self.cells[row][col]
                if symbol is not None:
                    yield Coord(row, col), symbol

    def empty_cells(self) -> List[Coord]:
        return [
            Coord(row, col)
            for row in range(self.size)
            for col in range(self.size)
            if self.cells[row][col] is None
        ]

    def is_cleared(self) -> bool:
        return all(symbol is None for line in self.cells for symbol in line)

    def snapshot(self) -> Tuple[Tuple[Optional[str], ...], ...]:
        return tuple(tuple(line) for line in self.cells)
