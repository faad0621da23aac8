from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from match3.components.tile import Cell
from match3.constants import MIN_RUN_LENGTH
from match3.systems.board_ops import grid_size, swapped_copy
from match3.utils.grid_geometry import Orientation, line_index


@dataclass(frozen=True, slots=True)
class MatchGroup:
    """A maximal straight run of at least three same-colored cells."""
    cells: Tuple[int, ...]
    orientation: Orientation

    def __len__(self) -> int:
        return len(self.cells)


def _scan_lines(grid: Sequence[Optional[Cell]], size: int, orientation: Orientation) -> List[MatchGroup]:
    groups: List[MatchGroup] = []

    def flush(run: List[int]) -> None:
        if len(run) >= MIN_RUN_LENGTH:
            groups.append(MatchGroup(cells=tuple(run), orientation=orientation))

    for primary in range(size):
        run: List[int] = []
        for secondary in range(size):
            idx = line_index(primary, secondary, orientation, size)
            cell = grid[idx]
            if cell is None:
                # Empty cells terminate a run.
                flush(run)
                run = []
                continue
            previous = grid[run[-1]] if run else None
            if previous is not None and previous.color == cell.color:
                run.append(idx)
            else:
                flush(run)
                run = [idx]
        flush(run)
    return groups


def find_matches(grid: Sequence[Optional[Cell]]) -> List[MatchGroup]:
    """Detect all horizontal then vertical runs of length >= 3."""
    size = grid_size(grid)
    return _scan_lines(grid, size, Orientation.HORIZONTAL) + _scan_lines(grid, size, Orientation.VERTICAL)


def creates_match(grid: Sequence[Optional[Cell]], a: int, b: int) -> bool:
    """Return True if swapping a/b on a copy of the grid yields at least one match group."""
    return bool(find_matches(swapped_copy(grid, a, b)))
