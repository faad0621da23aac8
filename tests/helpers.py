from __future__ import annotations

import random
from typing import List, Optional, Sequence

from match3.components.tile import Cell, SpecialKind
from match3.game import MatchThreeGame
from match3.systems.board_ops import Grid, write_grid

LETTER_COLORS = {'r': 'red', 'g': 'green', 'b': 'blue', 'y': 'yellow'}
SUFFIX_SPECIALS = {
    '-': SpecialKind.ROCKET_HORIZONTAL,
    '|': SpecialKind.ROCKET_VERTICAL,
    '*': SpecialKind.BOMB,
}

# Stable board with no legal move: color(r, c) = palette[(c + 2r) % 4].
BACKGROUND_ROWS = [
    "r g b y r g b",
    "b y r g b y r",
    "r g b y r g b",
    "b y r g b y r",
    "r g b y r g b",
    "b y r g b y r",
    "r g b y r g b",
]


def grid_from_rows(rows: Sequence[str]) -> Grid:
    """Build a grid from space separated tokens.

    A token is a color letter (r, g, b, y) optionally followed by ``-`` (horizontal rocket),
    ``|`` (vertical rocket) or ``*`` (bomb). ``.`` is an empty cell.
    """
    grid: Grid = []
    for row in rows:
        for token in row.split():
            if token == '.':
                grid.append(None)
                continue
            special = SUFFIX_SPECIALS.get(token[1:], SpecialKind.NONE) if len(token) > 1 else SpecialKind.NONE
            grid.append(Cell(LETTER_COLORS[token[0]], special))
    return grid


def background_with(row0: Optional[str] = None, **overrides: str) -> List[str]:
    """Background rows with row 0 (and any ``row<N>=...`` keyword) replaced."""
    rows = list(BACKGROUND_ROWS)
    if row0 is not None:
        rows[0] = row0
    for key, value in overrides.items():
        rows[int(key[3:])] = value
    return rows


class ScriptedRandom:
    """Random source whose ``randrange`` replays queued draws, then defers to a seeded generator."""

    def __init__(self, seed: int = 0, script: Sequence[int] = ()):
        self._fallback = random.Random(seed)
        self.script: List[int] = list(script)

    def queue(self, *draws: int) -> None:
        self.script.extend(draws)

    def randrange(self, *args):
        if self.script:
            return self.script.pop(0)
        return self._fallback.randrange(*args)


def make_game(rows: Optional[Sequence[str]] = None, *, seed: int = 0) -> MatchThreeGame:
    """Game driven by a ScriptedRandom (reachable as ``game.world.random``), optionally loaded with rows."""
    game = MatchThreeGame(rng=ScriptedRandom(seed))
    if rows is not None:
        load_rows(game, rows)
    return game


def load_rows(game: MatchThreeGame, rows: Sequence[str]) -> Grid:
    grid = grid_from_rows(rows)
    write_grid(game.world, grid)
    return grid


def collect(bus, name: str) -> list:
    """Subscribe to ``name`` and return the list every payload gets appended to."""
    received: list = []
    bus.subscribe(name, lambda sender, **payload: received.append(payload))
    return received
