"""Entry point for embedding the match-three rule engine.

Sets up the ECS world, event bus and systems, and exposes the player actions.
"""
from __future__ import annotations

import random
from typing import Optional, Tuple

from match3.components.game_state import ResolutionPhase
from match3.components.rules import Rules
from match3.components.tile import Cell
from match3.events.bus import EVENT_TICK, EVENT_TILE_CLICK, EventBus
from match3.outcome import MoveOutcome
from match3.systems.board import BoardSystem
from match3.systems.board_ops import Grid, grid_snapshot
from match3.systems.match_resolution import MatchResolutionSystem
from match3.systems.move_oracle import Move, find_legal_move
from match3.systems.turn_timer_system import TurnTimerSystem
from match3.utils.game_state import get_game_state, get_score
from match3.world import create_world


class MatchThreeGame:
    def __init__(
        self,
        *,
        seed: Optional[int] = None,
        rng=None,
        rules: Optional[Rules] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self.event_bus = event_bus or EventBus()
        if rng is None:
            rng = random.Random(seed)
        self.world = create_world(self.event_bus, rng=rng, rules=rules)
        self.board_system = BoardSystem(self.world, self.event_bus, fill=False)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus)
        self.turn_timer_system = TurnTimerSystem(self.world, self.event_bus)
        self.new_game()

    def new_game(self) -> Grid:
        """Generate a fresh playable board, reset score and clock, and return to idle."""
        return self.match_resolution_system.start_new_game()

    def attempt_swap(self, src: int, dst: int) -> MoveOutcome:
        return self.match_resolution_system.attempt_swap(src, dst)

    def activate_special(self, index: int) -> MoveOutcome:
        return self.match_resolution_system.activate_special(index)

    def query_hint(self) -> Optional[Move]:
        return find_legal_move(grid_snapshot(self.world))

    @property
    def grid(self) -> Tuple[Optional[Cell], ...]:
        return tuple(grid_snapshot(self.world))

    @property
    def score(self) -> int:
        return get_score(self.world).value

    @property
    def phase(self) -> ResolutionPhase:
        return get_game_state(self.world).phase

    @property
    def locked(self) -> bool:
        return get_game_state(self.world).locked

    def tick(self, dt: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    def click(self, row: int, col: int) -> None:
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)
