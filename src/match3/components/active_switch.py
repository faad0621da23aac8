from dataclasses import dataclass

@dataclass(slots=True)
class ActiveSwitch:
    """Per-tile occupancy flag.

    active: True if the cell currently holds a token; False while it is empty mid-resolution.
    Token information lives in a separate TileType component.
    """
    active: bool = True
