import pytest

from match3.errors import OutOfRangeIndex
from match3.utils.grid_geometry import (
    are_adjacent,
    check_index,
    col_indices,
    index,
    neighbors,
    orthogonal_neighbors,
    position,
    row_indices,
)


def test_index_and_position_are_row_major():
    assert index(0, 0) == 0
    assert index(3, 2) == 23
    assert position(23) == (3, 2)
    assert position(48) == (6, 6)


@pytest.mark.parametrize("bad", [-1, 49, 100])
def test_out_of_range_index_raises(bad):
    with pytest.raises(OutOfRangeIndex):
        check_index(bad)


def test_non_int_index_raises():
    with pytest.raises(OutOfRangeIndex):
        check_index(True)
    with pytest.raises(OutOfRangeIndex):
        check_index(1.0)


@pytest.mark.parametrize("row, col", [(1.5, 0), (True, 0), (0, "1")])
def test_non_int_position_raises(row, col):
    with pytest.raises(OutOfRangeIndex):
        index(row, col)


def test_out_of_range_position_raises():
    with pytest.raises(OutOfRangeIndex):
        index(7, 0)
    # OutOfRangeIndex is an IndexError, so generic handlers still catch it.
    with pytest.raises(IndexError):
        index(0, -1)


def test_adjacency_is_orthogonal_only():
    assert are_adjacent(0, 1)
    assert are_adjacent(0, 7)
    assert not are_adjacent(0, 8)
    # 6 and 7 are consecutive indices on different rows.
    assert not are_adjacent(6, 7)


def test_neighbor_orders():
    assert neighbors(24) == [25, 23, 31, 17]
    assert orthogonal_neighbors(24) == [17, 31, 23, 25]
    assert neighbors(0) == [1, 7]
    assert orthogonal_neighbors(48) == [41, 47]


def test_row_and_col_indices():
    assert row_indices(1) == [7, 8, 9, 10, 11, 12, 13]
    assert col_indices(2) == [2, 9, 16, 23, 30, 37, 44]
