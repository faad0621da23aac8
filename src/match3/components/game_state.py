"""Game state resource describing where the board is in its resolution cycle."""
from dataclasses import dataclass
from enum import Enum


class ResolutionPhase(Enum):
    """Phases of the board state machine; only IDLE accepts player actions."""
    IDLE = "idle"
    SWAP_PENDING = "swap_pending"
    SPECIAL_ACTIVATION_PENDING = "special_activation_pending"
    RESOLVING = "resolving"
    GAME_OVER = "game_over"


@dataclass(slots=True)
class GameState:
    """Singleton component storing the active resolution phase."""
    phase: ResolutionPhase = ResolutionPhase.IDLE

    @property
    def locked(self) -> bool:
        return self.phase is not ResolutionPhase.IDLE
