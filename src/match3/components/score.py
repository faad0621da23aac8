from dataclasses import dataclass

@dataclass(slots=True)
class Score:
    """Running score of the current game. Only the resolution system writes to it."""
    value: int = 0
