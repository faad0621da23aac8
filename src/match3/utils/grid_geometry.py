"""Index/position arithmetic for a square, row-major grid.

Row 0 is the top of the board; gravity pulls tokens toward row ``size - 1``.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Tuple

from match3.constants import GRID_SIZE
from match3.errors import OutOfRangeIndex

Position = Tuple[int, int]


class Orientation(Enum):
    HORIZONTAL = "h"
    VERTICAL = "v"


def check_index(cell_index: int, size: int = GRID_SIZE) -> int:
    if not isinstance(cell_index, int) or isinstance(cell_index, bool):
        raise OutOfRangeIndex(f"Cell index must be an int, got {cell_index!r}")
    if not 0 <= cell_index < size * size:
        raise OutOfRangeIndex(f"Cell index {cell_index} outside [0, {size * size})")
    return cell_index


def index(row: int, col: int, size: int = GRID_SIZE) -> int:
    for value in (row, col):
        if not isinstance(value, int) or isinstance(value, bool):
            raise OutOfRangeIndex(f"Row and column must be ints, got {(row, col)!r}")
    if not (0 <= row < size and 0 <= col < size):
        raise OutOfRangeIndex(f"Position {(row, col)} outside {size}x{size} grid")
    return row * size + col


def position(cell_index: int, size: int = GRID_SIZE) -> Position:
    check_index(cell_index, size)
    return divmod(cell_index, size)


def are_adjacent(a: int, b: int, size: int = GRID_SIZE) -> bool:
    ar, ac = position(a, size)
    br, bc = position(b, size)
    return abs(ar - br) + abs(ac - bc) == 1


def is_horizontal_pair(a: int, b: int, size: int = GRID_SIZE) -> bool:
    return position(a, size)[0] == position(b, size)[0]


def neighbors(cell_index: int, size: int = GRID_SIZE) -> List[int]:
    """In-bounds neighbors in move-scan order: right, left, down, up."""
    row, col = position(cell_index, size)
    result: List[int] = []
    if col + 1 < size:
        result.append(cell_index + 1)
    if col - 1 >= 0:
        result.append(cell_index - 1)
    if row + 1 < size:
        result.append(cell_index + size)
    if row - 1 >= 0:
        result.append(cell_index - size)
    return result


def orthogonal_neighbors(cell_index: int, size: int = GRID_SIZE) -> List[int]:
    """In-bounds neighbors in flood-fill order: up, down, left, right."""
    row, col = position(cell_index, size)
    result: List[int] = []
    for nr, nc in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
        if 0 <= nr < size and 0 <= nc < size:
            result.append(nr * size + nc)
    return result


def line_index(primary: int, secondary: int, orientation: Orientation, size: int = GRID_SIZE) -> int:
    """Cell at step ``secondary`` of row (horizontal) or column (vertical) ``primary``."""
    if orientation is Orientation.HORIZONTAL:
        return index(primary, secondary, size)
    return index(secondary, primary, size)


def row_indices(row: int, size: int = GRID_SIZE) -> List[int]:
    return [index(row, col, size) for col in range(size)]


def col_indices(col: int, size: int = GRID_SIZE) -> List[int]:
    return [index(row, col, size) for row in range(size)]
