from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from esper import World

from match3.components.active_switch import ActiveSwitch
from match3.components.board import Board
from match3.components.board_position import BoardPosition
from match3.components.tile import Cell, TileType
from match3.components.tile_type_registry import TileTypeRegistry
from match3.components.tile_types import TileTypes
from match3.utils.grid_geometry import Position

Grid = List[Optional[Cell]]


@dataclass(slots=True)
class GravityMove:
    source: int
    target: int
    cell: Cell


def get_tile_registry(world: World) -> TileTypes:
    for entity, _ in world.get_component(TileTypeRegistry):
        return world.component_for_entity(entity, TileTypes)
    raise RuntimeError("TileTypes definitions not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None


def grid_size(grid: Sequence[Optional[Cell]]) -> int:
    size = math.isqrt(len(grid))
    if size * size != len(grid) or size == 0:
        raise ValueError(f"Grid of {len(grid)} cells is not a non-empty square")
    return size


def random_cell(rng: random.Random, registry: TileTypes) -> Cell:
    """Fresh plain token; ``rng.randrange`` is the only randomness consumed."""
    return Cell(registry.color_at(rng.randrange(len(registry.spawnable))))


def swap_in(grid: Grid, a: int, b: int) -> None:
    grid[a], grid[b] = grid[b], grid[a]


def swapped_copy(grid: Sequence[Optional[Cell]], a: int, b: int) -> Grid:
    trial = list(grid)
    swap_in(trial, a, b)
    return trial


def apply_gravity(grid: Grid, spawn: Callable[[], Cell]) -> Tuple[List[GravityMove], List[int]]:
    """Compact every column downward and refill the vacated top cells in place.

    Columns are processed left to right; refills are drawn from the lowest empty cell upward.
    """
    size = grid_size(grid)
    moves: List[GravityMove] = []
    spawned: List[int] = []
    for col in range(size):
        write = size - 1
        for row in range(size - 1, -1, -1):
            idx = row * size + col
            cell = grid[idx]
            if cell is None:
                continue
            if write != row:
                target = write * size + col
                grid[target] = cell
                grid[idx] = None
                moves.append(GravityMove(source=idx, target=target, cell=cell))
            write -= 1
        while write >= 0:
            idx = write * size + col
            grid[idx] = spawn()
            spawned.append(idx)
            write -= 1
    return moves, spawned


def position_entities(world: World) -> Dict[Position, int]:
    return {(pos.row, pos.col): entity for entity, pos in world.get_component(BoardPosition)}


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def grid_snapshot(world: World) -> Grid:
    """Read the board entities into a row-major list; inactive cells become None."""
    dims = board_dimensions(world)
    if not dims:
        raise RuntimeError("Board component not found")
    rows, cols = dims
    grid: Grid = [None] * (rows * cols)
    for entity, position in world.get_component(BoardPosition):
        switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if not switch.active:
            continue
        tile: TileType = world.component_for_entity(entity, TileType)
        grid[position.row * cols + position.col] = Cell(tile.type_name, tile.special)
    return grid


def write_grid(world: World, grid: Sequence[Optional[Cell]]) -> None:
    """Commit a snapshot back onto the board entities."""
    dims = board_dimensions(world)
    if not dims:
        raise RuntimeError("Board component not found")
    rows, cols = dims
    if len(grid) != rows * cols:
        raise ValueError(f"Grid of {len(grid)} cells does not fit a {rows}x{cols} board")
    for (row, col), entity in position_entities(world).items():
        cell = grid[row * cols + col]
        tile: TileType = world.component_for_entity(entity, TileType)
        switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if cell is None:
            switch.active = False
            continue
        tile.type_name = cell.color
        tile.special = cell.special
        switch.active = True
