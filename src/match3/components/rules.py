from dataclasses import dataclass

from match3.constants import (
    GENERATOR_MAX_ATTEMPTS,
    GRID_SIZE,
    HINT_THRESHOLD_SECONDS,
    POINTS_PER_CELL,
    POINTS_PER_COMBO_STEP,
    TURN_SECONDS,
)


@dataclass(slots=True)
class Rules:
    """Tunable rule values, stored next to GameState on the state entity."""
    size: int = GRID_SIZE
    points_per_cell: int = POINTS_PER_CELL
    points_per_combo_step: int = POINTS_PER_COMBO_STEP
    turn_seconds: float = TURN_SECONDS
    hint_threshold: float = HINT_THRESHOLD_SECONDS
    generator_attempts: int = GENERATOR_MAX_ATTEMPTS
