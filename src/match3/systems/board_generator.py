from __future__ import annotations

import logging
import random
from typing import List, Sequence

from esper import World

from match3.components.tile import Cell
from match3.constants import CONSTRUCTIVE_MAX_ATTEMPTS, GENERATOR_MAX_ATTEMPTS, GRID_SIZE
from match3.systems.board_ops import Grid, get_tile_registry, write_grid
from match3.systems.match import find_matches
from match3.systems.move_oracle import has_legal_move
from match3.utils.game_state import get_rules

logger = logging.getLogger(__name__)


def is_playable(grid: Grid) -> bool:
    """A starting board has no matches and at least one legal move."""
    return not find_matches(grid) and has_legal_move(grid)


def sample_board(rng: random.Random, colors: Sequence[str], size: int = GRID_SIZE) -> Grid:
    return [Cell(colors[rng.randrange(len(colors))]) for _ in range(size * size)]


def constructive_board(rng: random.Random, colors: Sequence[str], size: int = GRID_SIZE) -> Grid:
    """Sample row by row, excluding any color that would complete a run of three.

    With three or more colors every cell keeps at least one candidate, so the result never
    contains a match.
    """
    grid: Grid = []
    for row in range(size):
        for col in range(size):
            available = list(colors)
            if col >= 2:
                left1 = grid[row * size + col - 1]
                left2 = grid[row * size + col - 2]
                if left1 == left2 and left1 is not None and left1.color in available:
                    available = [c for c in available if c != left1.color]
            if row >= 2:
                up1 = grid[(row - 1) * size + col]
                up2 = grid[(row - 2) * size + col]
                if up1 == up2 and up1 is not None and up1.color in available:
                    available = [c for c in available if c != up1.color]
            if not available:
                available = list(colors)
            grid.append(Cell(available[rng.randrange(len(available))]))
    return grid


def block_pattern_board(colors: Sequence[str], size: int = GRID_SIZE) -> Grid:
    """Deterministic 2x2-block checkerboard of two colors.

    Runs never exceed two cells, and for ``size >= 4`` swapping (1, 1) with (2, 1) completes
    a horizontal run, so the board is always playable.
    """
    first = colors[0]
    second = colors[1] if len(colors) > 1 else colors[0]
    return [
        Cell(first if ((row // 2) + (col // 2)) % 2 == 0 else second)
        for row in range(size)
        for col in range(size)
    ]


def generate_board(
    rng: random.Random,
    colors: Sequence[str],
    size: int = GRID_SIZE,
    *,
    max_attempts: int = GENERATOR_MAX_ATTEMPTS,
) -> Grid:
    """Fill a board uniformly at random until it has no matches and at least one legal move."""
    if not colors:
        raise ValueError("Board generation needs at least one color")
    palette: List[str] = list(colors)
    for attempt in range(max_attempts):
        grid = sample_board(rng, palette, size)
        if is_playable(grid):
            logger.debug("Generated %dx%d board after %d attempts", size, size, attempt + 1)
            return grid

    logger.warning(
        "No playable board after %d uniform attempts; switching to constructive sampling",
        max_attempts,
    )
    for _ in range(CONSTRUCTIVE_MAX_ATTEMPTS):
        grid = constructive_board(rng, palette, size)
        if is_playable(grid):
            return grid

    logger.warning("Constructive sampling failed; using fixed block pattern")
    return block_pattern_board(palette, size)


def regenerate_board(world: World) -> Grid:
    """Replace the whole board with a freshly generated playable one and return it."""
    rules = get_rules(world)
    registry = get_tile_registry(world)
    grid = generate_board(
        getattr(world, "random"),
        registry.spawnable_types(),
        rules.size,
        max_attempts=rules.generator_attempts,
    )
    write_grid(world, grid)
    return grid
