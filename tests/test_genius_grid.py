import itertools

import numpy as np
import pytest

from daily15.genius import BLOCKER, DAILY_BLOCKERS, EMPTY, PIECES_CONFIG, GeniusGrid, rotated


@pytest.fixture
def grid():
    return GeniusGrid(6, DAILY_BLOCKERS)


def _expected_valid(grid, shape, row, col):
    for i, j in zip(*np.nonzero(shape)):
        r, c = row + i, col + j
        if not (0 <= r < grid.size and 0 <= c < grid.size):
            return False
        if grid.grid[r, c] != EMPTY:
            return False
    return True


def test_blockers_are_marked(grid):
    for r, c in DAILY_BLOCKERS:
        assert grid.grid[r, c] == BLOCKER
    assert int(np.count_nonzero(grid.grid)) == len(DAILY_BLOCKERS)
    assert not grid.is_full()


def test_blocker_outside_grid_is_rejected():
    with pytest.raises(ValueError):
        GeniusGrid(6, [(6, 0)])


def test_validity_matches_cell_by_cell_check(grid):
    grid.fill([(2, 2), (2, 3)], 3)
    for spec in PIECES_CONFIG.values():
        for rotation in range(4):
            shape = rotated(spec.shape, rotation)
            for row, col in itertools.product(range(-2, 8), repeat=2):
                assert grid.is_valid_placement(shape, row, col) == _expected_valid(grid, shape, row, col)


@pytest.mark.parametrize(
    "piece_id,rotation,cursor,expected",
    [
        ("I1", 0, (0, 0), (0, 0)),
        ("I1", 0, (1, 1), (1, 2)),
        ("I2", 0, (0, 4), (0, 2)),
        ("I2", 0, (1, 1), (2, 0)),
        ("I5", 0, (1, 1), (2, 0)),
        ("I5", 0, (5, 5), None),
        ("I5", 1, (3, 4), (1, 4)),
    ],
)
def test_snap(grid, piece_id, rotation, cursor, expected):
    shape = rotated(PIECES_CONFIG[piece_id].shape, rotation)
    assert grid.snap(shape, *cursor) == expected


def test_snap_search_stays_within_one_cell():
    open_cell = (0, 3)
    blockers = [(r, c) for r in range(6) for c in range(6) if (r, c) != open_cell]
    grid = GeniusGrid(6, blockers)
    single = rotated(PIECES_CONFIG["I1"].shape, 0)
    assert grid.snap(single, 0, 0) is None
    assert grid.snap(single, 1, 2) == open_cell


def test_fill_and_clear(grid):
    cells = GeniusGrid.cells_at(np.array([[1, 1], [1, 0]]), 2, 2)
    assert cells == [(2, 2), (2, 3), (3, 2)]
    assert grid.fill(cells[:2], 4) == 2
    assert grid.clear(4) == 2
    assert grid.grid[2, 2] == EMPTY


def test_filled_ratio(grid):
    assert grid.get_filled_ratio() == pytest.approx(6 / 36)
    grid.fill([(0, 0)], 1)
    assert grid.get_filled_ratio() == pytest.approx(7 / 36)
