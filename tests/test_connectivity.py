import random

import pytest

from emojilink.components.grid import Coord, Grid
from emojilink.errors import OutOfBounds
from emojilink.utils.connectivity import (
    Connected,
    NOT_CONNECTED,
    NotConnected,
    Strategy,
    connect,
    has_direct_path,
    path_segments,
    validate_path,
)
from tests.helpers import make_grid


def test_direct_path_along_empty_row():
    grid = make_grid(
        "A..A",
        "BCDE",
        "FGHI",
        "JKLM",
    )
    result = connect(grid, (0, 0), (0, 3))
    assert result == Connected(path=((0, 0), (0, 3)), strategy=Strategy.DIRECT)
    assert result.bends == ()


def test_direct_path_along_empty_column():
    grid = make_grid(
        "AB",
        "AC",
    )
    result = connect(grid, (0, 0), (1, 0))
    assert isinstance(result, Connected)
    assert result.path == ((0, 0), (1, 0))


def test_blocked_line_is_not_direct():
    grid = make_grid(
        "ABA",
        "...",
        "...",
    )
    assert not has_direct_path(grid, (0, 0), (0, 2))
    result = connect(grid, (0, 0), (0, 2))
    # Falls through to a two-bend detour below the blocker.
    assert isinstance(result, Connected)
    assert result.strategy is Strategy.TWO_BEND


def test_one_bend_prefers_corner_on_first_row():
    grid = make_grid(
        "A.",
        ".A",
    )
    forward = connect(grid, (0, 0), (1, 1))
    assert forward == Connected(path=((0, 0), (0, 1), (1, 1)), strategy=Strategy.ONE_BEND)
    # Swapping the endpoints swaps which corner is (a.row, b.col).
    backward = connect(grid, (1, 1), (0, 0))
    assert backward.path == ((1, 1), (1, 0), (0, 0))


def test_one_bend_falls_back_to_second_corner():
    grid = make_grid(
        "AB",
        ".A",
    )
    result = connect(grid, (0, 0), (1, 1))
    assert result.path == ((0, 0), (1, 0), (1, 1))
    assert result.bends == ((1, 0),)


def test_two_bend_scenario_reports_exact_bends():
    grid = make_grid(
        "A..B",
        "C...",
        "C...",
        "A..B",
    )
    result = connect(grid, (0, 0), (3, 0))
    assert result == Connected(
        path=((0, 0), (0, 1), (3, 1), (3, 0)),
        strategy=Strategy.TWO_BEND,
    )
    assert result.bends == (Coord(0, 1), Coord(3, 1))


def test_two_bend_tie_break_is_row_major():
    grid = make_grid(
        ".....",
        ".....",
        "A.X.A",
        ".....",
        ".....",
    )
    # Many detours exist; the smallest first bend (0, 0) then smallest second bend wins.
    result = connect(grid, (2, 0), (2, 4))
    assert result.path == ((2, 0), (0, 0), (0, 4), (2, 4))


def test_enclosed_cell_is_not_connected():
    grid = make_grid(
        "AB.",
        "B..",
        "..A",
    )
    assert connect(grid, (0, 0), (2, 2)) is NOT_CONNECTED


@pytest.mark.parametrize(
    "a, b",
    [
        ((0, 0), (0, 0)),  # same cell
        ((0, 0), (0, 1)),  # different symbols
        ((0, 0), (1, 1)),  # empty endpoint
    ],
)
def test_precondition_failures_are_not_connected(a, b):
    grid = make_grid(
        "AB",
        "A.",
    )
    assert isinstance(connect(grid, a, b), NotConnected)


def test_out_of_bounds_coordinate_raises():
    grid = make_grid("AA", "..")
    with pytest.raises(OutOfBounds):
        connect(grid, (0, 0), (0, 2))


def test_connect_does_not_mutate_grid():
    grid = make_grid(
        "A..B",
        "C...",
        "C...",
        "A..B",
    )
    before = grid.snapshot()
    connect(grid, (0, 0), (3, 0))
    connect(grid, (0, 3), (3, 3))
    assert grid.snapshot() == before


def _sparse_grid(seed: int, size: int = 5) -> Grid:
    rng = random.Random(seed)
    grid = Grid.create(size, "ABC", rng)
    for row in range(size):
        for col in range(size):
            if rng.random() < 0.45:
                grid.clear((row, col))
    return grid


@pytest.mark.parametrize("seed", range(12))
def test_connect_is_symmetric_and_paths_are_valid(seed):
    grid = _sparse_grid(seed)
    cells = list(grid.occupied())
    for a, symbol_a in cells:
        for b, symbol_b in cells:
            if a == b or symbol_a != symbol_b:
                continue
            forward = connect(grid, a, b)
            backward = connect(grid, b, a)
            assert isinstance(forward, Connected) == isinstance(backward, Connected)
            if isinstance(forward, Connected):
                assert forward.path[0] == a and forward.path[-1] == b
                assert validate_path(grid, forward.path)


def test_validate_path_rejects_broken_paths():
    grid = make_grid(
        "A.B",
        "...",
        "B.A",
    )
    assert validate_path(grid, [(0, 0), (0, 1)])
    assert not validate_path(grid, [(0, 0)])
    assert not validate_path(grid, [(0, 0), (1, 1)])  # diagonal
    assert not validate_path(grid, [(0, 0), (0, 2), (2, 2)])  # bend on occupied cell
    assert not validate_path(grid, [(0, 0), (0, 1), (0, 1), (1, 1), (2, 2)])  # too long
    assert not validate_path(grid, [(0, 0), (0, 3)])  # leaves the grid
    assert not validate_path(grid, [(0, 0), (0, 1), (0, 1)])  # zero-length segment


def test_path_segments_pairs_consecutive_points():
    assert path_segments([(0, 0), (0, 2), (3, 2)]) == [((0, 0), (0, 2)), ((0, 2), (3, 2))]
