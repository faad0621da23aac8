import random

from esper import World
from .events.bus import EventBus
from match3.components.game_state import GameState
from match3.components.rules import Rules
from match3.components.score import Score
from match3.components.tile_type_registry import TileTypeRegistry
from match3.components.tile_types import TileTypes
from match3.components.turn_clock import TurnClock

# Four token colors; order defines the draw index -> color mapping.
DEFAULT_TILE_TYPES = ['red', 'green', 'blue', 'yellow']


def create_world(
    event_bus: EventBus,
    *,
    rng: random.Random | None = None,
    rules: Rules | None = None,
) -> World:
    world = World()
    # Any object with ``randrange`` works; tests inject scripted sources.
    setattr(world, "random", rng or random.Random())
    rules = rules or Rules()

    # Global state resources live on a single entity.
    world.create_entity(
        GameState(),
        Score(),
        rules,
        TurnClock(seconds_left=rules.turn_seconds),
    )

    # Single registry entity with canonical tile types.
    world.create_entity(
        TileTypeRegistry(),
        TileTypes(spawnable=list(DEFAULT_TILE_TYPES)),
    )
    return world
