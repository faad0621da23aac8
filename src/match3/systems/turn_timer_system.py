import logging

from esper import World

from match3.components.game_state import ResolutionPhase
from match3.events.bus import (
    EventBus,
    EVENT_BOARD_RESHUFFLED,
    EVENT_GAME_OVER,
    EVENT_GAME_STARTED,
    EVENT_HINT_SHOWN,
    EVENT_MOVE_RESOLVED,
    EVENT_TICK,
    EVENT_TURN_CLOCK_CHANGED,
)
from match3.systems.board_generator import regenerate_board
from match3.systems.board_ops import grid_snapshot
from match3.systems.move_oracle import find_legal_move
from match3.utils.game_state import get_game_state, get_or_create_turn_clock, get_rules, get_score, set_phase

logger = logging.getLogger(__name__)


class TurnTimerSystem:
    """Counts the player's turn down from ``Rules.turn_seconds``.

    Flow:
      - Each EVENT_TICK while idle drains the clock by ``dt``; any other phase pauses it.
      - Once the hint threshold is crossed the first legal move is published, once per turn.
        If there is none the board is regenerated and the clock starts over.
      - Reaching zero ends the game.
    A valid move or a new game restarts the clock.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_MOVE_RESOLVED, self.on_move_resolved)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_game_started)
        get_or_create_turn_clock(self.world)

    def on_tick(self, sender, **payload):
        dt = float(payload.get('dt', 0.0))
        if dt <= 0 or get_game_state(self.world).locked:
            return
        clock = get_or_create_turn_clock(self.world)
        clock.seconds_left = max(0.0, clock.seconds_left - dt)
        self.event_bus.emit(EVENT_TURN_CLOCK_CHANGED, seconds_left=clock.seconds_left)
        if not clock.hint_shown and clock.seconds_left <= get_rules(self.world).hint_threshold:
            self._surface_hint()
        if clock.seconds_left <= 0.0:
            self._end_game()

    def on_move_resolved(self, sender, **payload):
        outcome = payload.get('outcome')
        if outcome is not None and outcome.valid:
            self.reset_clock()

    def on_game_started(self, sender, **payload):
        self.reset_clock()

    def reset_clock(self):
        clock = get_or_create_turn_clock(self.world)
        clock.seconds_left = get_rules(self.world).turn_seconds
        clock.hint_shown = False
        clock.hint = None
        self.event_bus.emit(EVENT_TURN_CLOCK_CHANGED, seconds_left=clock.seconds_left)

    def _surface_hint(self):
        clock = get_or_create_turn_clock(self.world)
        clock.hint_shown = True
        move = find_legal_move(grid_snapshot(self.world))
        if move is None:
            logger.info("No hint available; reshuffling board")
            snapshot = regenerate_board(self.world)
            self.event_bus.emit(EVENT_BOARD_RESHUFFLED, snapshot=tuple(snapshot), reason='no_hint')
            self.reset_clock()
            return
        clock.hint = (move.source, move.target)
        self.event_bus.emit(EVENT_HINT_SHOWN, move=move)

    def _end_game(self):
        score = get_score(self.world).value
        set_phase(self.world, self.event_bus, ResolutionPhase.GAME_OVER)
        logger.info("Turn clock expired; game over with score %d", score)
        self.event_bus.emit(EVENT_GAME_OVER, score=score, reason='timeout')
