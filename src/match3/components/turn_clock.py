from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(slots=True)
class TurnClock:
    """Countdown for the current turn plus the hint surfaced during it."""
    seconds_left: float
    hint_shown: bool = False
    hint: Optional[Tuple[int, int]] = None
