from __future__ import annotations

from typing import List, NamedTuple, Optional, Sequence

from match3.components.tile import Cell
from match3.systems.board_ops import grid_size
from match3.systems.match import creates_match
from match3.utils.grid_geometry import neighbors


class Move(NamedTuple):
    source: int
    target: int


def find_legal_move(grid: Sequence[Optional[Cell]]) -> Optional[Move]:
    """Return the first legal swap in scan order, or None when the board is deadlocked.

    Cells are scanned in index order and each cell's neighbors right, left, down, up. A pair is
    legal when the scanned cell holds a special (always activatable) or the swap yields a match.
    """
    size = grid_size(grid)
    for idx in range(len(grid)):
        cell = grid[idx]
        for neighbor in neighbors(idx, size):
            if cell is not None and cell.is_special:
                return Move(idx, neighbor)
            if creates_match(grid, idx, neighbor):
                return Move(idx, neighbor)
    return None


def has_legal_move(grid: Sequence[Optional[Cell]]) -> bool:
    return find_legal_move(grid) is not None


def find_legal_moves(grid: Sequence[Optional[Cell]]) -> List[Move]:
    """Enumerate every adjacent pair (right/down scan) that is a legal move."""
    size = grid_size(grid)
    moves: List[Move] = []
    for idx in range(len(grid)):
        row, col = divmod(idx, size)
        for neighbor, in_bounds in ((idx + 1, col + 1 < size), (idx + size, row + 1 < size)):
            if not in_bounds:
                continue
            first, second = grid[idx], grid[neighbor]
            special = (first is not None and first.is_special) or (second is not None and second.is_special)
            if special or creates_match(grid, idx, neighbor):
                moves.append(Move(idx, neighbor))
    return moves
