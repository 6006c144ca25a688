"""Path search between two cells of a :class:`Grid`.

A connection is a rectilinear path with at most two bends whose interior runs
only over empty cells. Strategies are tried in a fixed order (direct, one bend,
two bends) and the first hit is reported, so the same board always yields the
same path.

Two-bend search scans candidate bends in row-major order: when several paths
exist, the one with the smallest first bend by (row, col), then the smallest
second bend, wins.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple, Union

from emojilink.components.grid import Coord, Grid

Position = Tuple[int, int]


class Strategy(Enum):
    DIRECT = 0
    ONE_BEND = 1
    TWO_BEND = 2


@dataclass(frozen=True, slots=True)
class Connected:
    path: Tuple[Coord, ...]
    strategy: Strategy

    @property
    def bends(self) -> Tuple[Coord, ...]:
        return self.path[1:-1]


@dataclass(frozen=True, slots=True)
class NotConnected:
    pass


NOT_CONNECTED = NotConnected()
PathResult = Union[Connected, NotConnected]


def has_direct_path(grid: Grid, a: Position, b: Position) -> bool:
    """True if a and b share a row or column and every cell strictly between them is empty."""
    (r1, c1), (r2, c2) = a, b
    if r1 == r2:
        lo, hi = sorted((c1, c2))
        return all(grid.cells[r1][col] is None for col in range(lo + 1, hi))
    if c1 == c2:
        lo, hi = sorted((r1, r2))
        return all(grid.cells[row][c1] is None for row in range(lo + 1, hi))
    return False


def find_one_bend(grid: Grid, a: Position, b: Position) -> Coord | None:
    # (a.row, b.col) is preferred over (b.row, a.col).
    for corner in (Coord(a[0], b[1]), Coord(b[0], a[1])):
        if not grid.in_bounds(corner) or grid.cells[corner.row][corner.col] is not None:
            continue
        if has_direct_path(grid, a, corner) and has_direct_path(grid, corner, b):
            return corner
    return None


def find_two_bend(grid: Grid, a: Position, b: Position) -> Tuple[Coord, Coord] | None:
    empties = grid.empty_cells()
    for first in empties:
        if not has_direct_path(grid, a, first):
            continue
        for second in empties:
            if second == first:
                continue
            if has_direct_path(grid, first, second) and has_direct_path(grid, second, b):
                return first, second
    return None


def connect(grid: Grid, a: Position, b: Position) -> PathResult:
    """Return the canonical connection between ``a`` and ``b``.

    Raises OutOfBounds for coordinates outside the grid. Identical, empty or
    mismatched cells are ordinary ``NotConnected`` outcomes.
    """
    a, b = Coord(*a), Coord(*b)
    symbol_a = grid.get(a)
    symbol_b = grid.get(b)
    if a == b or symbol_a is None or symbol_a != symbol_b:
        return NOT_CONNECTED

    if has_direct_path(grid, a, b):
        return Connected(path=(a, b), strategy=Strategy.DIRECT)

    corner = find_one_bend(grid, a, b)
    if corner is not None:
        return Connected(path=(a, corner, b), strategy=Strategy.ONE_BEND)

    corners = find_two_bend(grid, a, b)
    if corners is not None:
        return Connected(path=(a, corners[0], corners[1], b), strategy=Strategy.TWO_BEND)

    return NOT_CONNECTED


def validate_path(grid: Grid, path: Sequence[Position]) -> bool:
    """Check a path against the current grid.

    Requires 2-4 in-bounds points, axis-aligned segments, empty bend points and
    empty cells strictly inside every segment.
    """
    if not 2 <= len(path) <= 4:
        return False
    if not all(grid.in_bounds(point) for point in path):
        return False
    for bend in path[1:-1]:
        if grid.cells[bend[0]][bend[1]] is not None:
            return False
    for start, end in path_segments(path):
        if start == end or (start[0] != end[0] and start[1] != end[1]):
            return False
        if not has_direct_path(grid, start, end):
            return False
    return True


def path_segments(path: Sequence[Position]) -> List[Tuple[Coord, Coord]]:
    return [(Coord(*path[i]), Coord(*path[i + 1])) for i in range(len(path) - 1)]
