from __future__ import annotations

from esper import World

from match3.components.game_state import GameState, ResolutionPhase
from match3.components.rules import Rules
from match3.components.score import Score
from match3.components.turn_clock import TurnClock
from match3.events.bus import EVENT_PHASE_CHANGED, EventBus


def get_game_state(world: World) -> GameState:
    for _, state in world.get_component(GameState):
        return state
    raise RuntimeError("GameState resource not found")


def get_score(world: World) -> Score:
    for _, score in world.get_component(Score):
        return score
    raise RuntimeError("Score resource not found")


def get_rules(world: World) -> Rules:
    for _, rules in world.get_component(Rules):
        return rules
    raise RuntimeError("Rules resource not found")


def get_or_create_turn_clock(world: World) -> TurnClock:
    """Return the shared TurnClock component, creating it if absent."""
    existing = list(world.get_component(TurnClock))
    if existing:
        return existing[0][1]
    clock = TurnClock(seconds_left=get_rules(world).turn_seconds)
    world.create_entity(clock)
    return clock


def set_phase(world: World, event_bus: EventBus, phase: ResolutionPhase) -> None:
    """Update the resolution phase and emit a change event when it differs."""
    state = get_game_state(world)
    previous_phase = state.phase
    if previous_phase is phase:
        return
    state.phase = phase
    event_bus.emit(EVENT_PHASE_CHANGED, previous_phase=previous_phase, new_phase=phase)
