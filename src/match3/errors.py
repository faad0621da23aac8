class OutOfRangeIndex(IndexError):
    """Raised when a cell index or (row, col) position falls outside the grid."""


class BoardLocked(RuntimeError):
    """Raised when an action arrives while the board is not idle."""

    def __init__(self, phase) -> None:
        super().__init__(f"Board is locked (phase: {phase.value})")
        self.phase = phase
