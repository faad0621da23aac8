from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set, Tuple

from match3.components.tile import Cell
from match3.systems.board_ops import grid_size
from match3.systems.match import MatchGroup
from match3.utils.grid_geometry import orthogonal_neighbors


@dataclass(frozen=True, slots=True)
class MatchComponent:
    """Color-connected union of matched cells, in flood-fill discovery order."""
    color: str
    cells: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.cells)


def group_matches(grid: Sequence[Optional[Cell]], groups: Sequence[MatchGroup]) -> List[MatchComponent]:
    """Merge overlapping/adjacent match groups of one color into connected components.

    Starts are taken in first-seen order over ``groups``; the flood fill walks neighbors up,
    down, left, right and only crosses into matched cells of the same color.
    """
    size = grid_size(grid)
    # dict keeps first-seen order, which fixes component and survivor ordering.
    matched: Dict[int, None] = {}
    for group in groups:
        for idx in group.cells:
            matched.setdefault(idx, None)

    visited: Set[int] = set()
    components: List[MatchComponent] = []
    for start in matched:
        if start in visited:
            continue
        start_cell = grid[start]
        if start_cell is None:
            continue
        color = start_cell.color
        queue = deque([start])
        visited.add(start)
        cells: List[int] = []
        while queue:
            idx = queue.popleft()
            cells.append(idx)
            for neighbor in orthogonal_neighbors(idx, size):
                if neighbor in visited or neighbor not in matched:
                    continue
                neighbor_cell = grid[neighbor]
                if neighbor_cell is None or neighbor_cell.color != color:
                    continue
                visited.add(neighbor)
                queue.append(neighbor)
        components.append(MatchComponent(color=color, cells=tuple(cells)))
    return components
