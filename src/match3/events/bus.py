from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere else alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col
EVENT_TILE_SELECTED = "tile_selected"              # payload: index, row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: index, reason=str


# ============================================================================
# PLAYER ACTIONS
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"                  # payload: src=int, dst=int
EVENT_SPECIAL_ACTIVATE_REQUEST = "special_activate_request"    # payload: index=int
EVENT_TILE_SWAP_VALID = "tile_swap_valid"                      # payload: src=int, dst=int
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"                  # payload: src=int, dst=int, reason=InvalidReason
EVENT_SPECIAL_ACTIVATED = "special_activated"                  # payload: activations=[(index, SpecialKind)]


# ============================================================================
# RESOLUTION PASSES
# ============================================================================
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[index,...]
EVENT_MATCH_FOUND = "match_found"                  # payload: groups=[MatchGroup], positions=[index,...], depth=int
EVENT_SPECIALS_DETONATED = "specials_detonated"    # payload: specials=[(index, SpecialKind)], depth=int
EVENT_SPECIAL_CREATED = "special_created"          # payload: index=int, kind=SpecialKind, color=str
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[index,...], depth=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove], depth=int
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[index,...], depth=int
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int, reason=str
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int


# ============================================================================
# BOARD LIFECYCLE
# ============================================================================
EVENT_GAME_STARTED = "game_started"                # payload: snapshot=tuple[Cell, ...]
EVENT_BOARD_RESHUFFLED = "board_reshuffled"        # payload: snapshot=tuple[Cell, ...], reason=str
EVENT_MOVE_RESOLVED = "move_resolved"              # payload: outcome=MoveOutcome
EVENT_PHASE_CHANGED = "phase_changed"              # payload: previous_phase, new_phase


# ============================================================================
# TURN CLOCK
# ============================================================================
EVENT_TURN_CLOCK_CHANGED = "turn_clock_changed"    # payload: seconds_left=float
EVENT_HINT_SHOWN = "hint_shown"                    # payload: move=Move
EVENT_GAME_OVER = "game_over"                      # payload: score=int, reason=str
