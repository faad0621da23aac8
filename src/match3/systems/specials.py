"""Special token rules: survivor selection, rocket/bomb creation, blast areas and chains.

Everything here computes on a grid snapshot and never mutates it; ``apply_plan`` is the
single commit point used by the resolution system once a pass has been fully planned.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Collection, Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from match3.components.tile import Cell, SpecialKind
from match3.constants import BOMB_COMPONENT_THRESHOLD, BOMB_RADIUS, GRID_SIZE, ROCKET_RUN_LENGTH
from match3.systems.board_ops import Grid, grid_size
from match3.systems.match import MatchGroup
from match3.systems.match_grouping import MatchComponent
from match3.utils.grid_geometry import Orientation, check_index, is_horizontal_pair, position

Swap = Tuple[int, int]
Detonation = Tuple[int, SpecialKind]


@dataclass(frozen=True, slots=True)
class SpecialSpawn:
    index: int
    kind: SpecialKind
    color: str


@dataclass(frozen=True, slots=True)
class PassPlan:
    """Everything one resolution pass will do, computed before the grid is touched."""
    matched: Tuple[int, ...]
    removed: FrozenSet[int]
    spawns: Tuple[SpecialSpawn, ...]
    detonated: Tuple[Detonation, ...]


def choose_survivor(cells: Sequence[int], swap: Optional[Swap]) -> int:
    """Pick the cell that hosts a new special: a member swap endpoint, else the central cell."""
    if swap is not None:
        first, second = swap
        if first in cells:
            return first
        if second in cells:
            return second
    return cells[len(cells) // 2]


def upgrade_special(spawns: Dict[int, SpecialSpawn], index: int, kind: SpecialKind, color: str) -> None:
    """Record a spawn at ``index``; a bomb replaces a rocket but never the other way round."""
    existing = spawns.get(index)
    if existing is None or (existing.kind is not SpecialKind.BOMB and kind is SpecialKind.BOMB):
        spawns[index] = SpecialSpawn(index=index, kind=kind, color=color)


def rocket_kind(group: MatchGroup, swap: Optional[Swap], size: int = GRID_SIZE) -> SpecialKind:
    # The swap axis only wins on the first pass of a swap; later passes pass swap=None.
    if swap is not None:
        horizontal = is_horizontal_pair(swap[0], swap[1], size)
    else:
        horizontal = group.orientation is Orientation.HORIZONTAL
    return SpecialKind.ROCKET_HORIZONTAL if horizontal else SpecialKind.ROCKET_VERTICAL


def blast_area(center: int, kind: SpecialKind, size: int = GRID_SIZE) -> Set[int]:
    row, col = position(center, size)
    targets = {center}
    if kind is SpecialKind.ROCKET_HORIZONTAL:
        targets.update(row * size + c for c in range(size))
    elif kind is SpecialKind.ROCKET_VERTICAL:
        targets.update(r * size + col for r in range(size))
    elif kind is SpecialKind.BOMB:
        for r in range(max(0, row - BOMB_RADIUS), min(size, row + BOMB_RADIUS + 1)):
            for c in range(max(0, col - BOMB_RADIUS), min(size, col + BOMB_RADIUS + 1)):
                targets.add(r * size + c)
    return targets


def expand_blast(
    grid: Sequence[Optional[Cell]],
    seeds: Iterable[int],
    protected: Collection[int] = (),
) -> Tuple[Set[int], List[Detonation]]:
    """Grow a removal set through every special it touches until no new special is reached.

    Returns the full removal set and the detonated specials in discovery order. Cells in
    ``protected`` are never removed and never detonate. A survivor covered by a chained
    blast is therefore not counted in the removal set or the score, and a special it held
    before the pass is overwritten without firing.
    """
    size = grid_size(grid)
    removed: Set[int] = set()
    queue: deque[int] = deque()
    for idx in seeds:
        if idx in protected or idx in removed:
            continue
        removed.add(idx)
        cell = grid[idx]
        if cell is not None and cell.is_special:
            queue.append(idx)

    visited: Set[int] = set()
    detonated: List[Detonation] = []
    while queue:
        idx = queue.popleft()
        if idx in visited:
            continue
        visited.add(idx)
        cell = grid[idx]
        if cell is None or not cell.is_special:
            continue
        detonated.append((idx, cell.special))
        for target in sorted(blast_area(idx, cell.special, size)):
            if target in protected:
                continue
            removed.add(target)
            target_cell = grid[target]
            if target_cell is not None and target_cell.is_special and target not in visited:
                queue.append(target)
    return removed, detonated


def plan_pass(
    grid: Sequence[Optional[Cell]],
    groups: Sequence[MatchGroup],
    components: Sequence[MatchComponent],
    swap: Optional[Swap] = None,
) -> PassPlan:
    """Plan one cascade pass. ``swap`` is set only on the first pass of a player swap."""
    size = grid_size(grid)
    matched: Dict[int, None] = {}
    for group in groups:
        for idx in group.cells:
            matched.setdefault(idx, None)

    spawns: Dict[int, SpecialSpawn] = {}
    for group in groups:
        if len(group) != ROCKET_RUN_LENGTH:
            continue
        pivot = choose_survivor(group.cells, swap)
        pivot_cell = grid[pivot]
        if pivot_cell is None:
            raise ValueError(f"Run cell {pivot} is empty")
        upgrade_special(spawns, pivot, rocket_kind(group, swap, size), pivot_cell.color)

    for component in components:
        if len(component) <= BOMB_COMPONENT_THRESHOLD:
            continue
        pivot = choose_survivor(component.cells, swap)
        upgrade_special(spawns, pivot, SpecialKind.BOMB, component.color)

    removed, detonated = expand_blast(grid, matched, protected=spawns.keys())
    return PassPlan(
        matched=tuple(matched),
        removed=frozenset(removed),
        spawns=tuple(spawns.values()),
        detonated=tuple(detonated),
    )


def plan_activation(grid: Sequence[Optional[Cell]], indices: Iterable[int]) -> PassPlan:
    """Plan a direct detonation of the specials sitting at ``indices``."""
    size = grid_size(grid)
    activated: List[int] = []
    for idx in indices:
        check_index(idx, size)
        cell = grid[idx]
        if cell is not None and cell.is_special and idx not in activated:
            activated.append(idx)
    removed, detonated = expand_blast(grid, activated)
    return PassPlan(
        matched=(),
        removed=frozenset(removed),
        spawns=(),
        detonated=tuple(detonated),
    )


def apply_plan(grid: Grid, plan: PassPlan) -> None:
    for idx in plan.removed:
        grid[idx] = None
    for spawn in plan.spawns:
        grid[spawn.index] = Cell(spawn.color, spawn.kind)
